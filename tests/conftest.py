import pytest

DEFAULT_MOVES = (
    "1. e4 {[%clk 0:04:59.9]} 1... e5 {[%clk 0:04:58.1]} "
    "2. Nf3 {[%clk 0:04:57]} 2... Nc6 {[%clk 0:04:55]} "
    "3. Bc4 {[%clk 0:04:50]} 3... Nf6 {[%clk 0:04:45]}"
)


def build_block(
    white="Alice", black="Bob", result="1-0", time_control="300+2",
    date="2024.01.05", white_elo="1500", black_elo="1480",
    event="Live Chess", moves=DEFAULT_MOVES,
):
    headers = [
        f'[Event "{event}"]',
        '[Site "Chess.com"]',
        f'[Date "{date}"]',
        '[Round "-"]',
        f'[White "{white}"]',
        f'[Black "{black}"]',
        f'[Result "{result}"]',
        f'[UTCDate "{date}"]',
        f'[WhiteElo "{white_elo}"]',
        f'[BlackElo "{black_elo}"]',
        f'[TimeControl "{time_control}"]',
    ]
    return "\n".join(headers) + "\n\n" + f"{moves} {result}"


@pytest.fixture
def pgn_block():
    """Returns a builder for Chess.com-style PGN game blocks."""
    return build_block
