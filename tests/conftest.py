import os
import sys

import pytest


# Ensure the repository root is on sys.path for `from fantasy_chess...` imports
REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)


# 75 plies: en passant, castling on both wings and a queen promotion
LONG_GAME = (
    "mC0KlB3NBJYIJQXHfHWGgvZJbs1LcD2Mdl6Seg5QHy7Zae86CJSJeK9IvMIngn!TlJTJsHJDjz"
    "ZBnwBtfvtvwv7tvDQBHBtuKI67Du?8BS70zG87GO7dkALDuDdfDKfTOWTSMSNFW~01491U9TUNTM"
)

# 38 plies, both sides castle kingside
SHORT_GAME = "".join(
    [
        "mC", "0K", "bs", "1L", "lt", "!T", "gv", "9I", "sy", "70",
        "cM", "8!", "iq", "ZJ", "jz", "IP", "tB", "3V", "MT", "9T",
        "BK", "TQ", "fH", "QU", "eg", "6S", "ks", "WG", "vB", "PB",
        "dc", "4W", "cd", "W4", "dB", "0M", "ad", "Mo",
    ]
)

# 1. e4 d5 2. exd5 c5 3. dxc6 Nxc6 4. Nf3 e5 5. Bb5 Bd6 6. O-O Nge7 7. d4 O-O 8. dxe5
OPENING_GAME = "mCZJCJYIJQ5Qgv0KfH9Reg!0lB8!BK"


@pytest.fixture
def long_game() -> str:
    return LONG_GAME


@pytest.fixture
def short_game() -> str:
    return SHORT_GAME


@pytest.fixture
def opening_game() -> str:
    return OPENING_GAME
