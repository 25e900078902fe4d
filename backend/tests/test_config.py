import pytest
from pydantic import ValidationError

from backend.config import Settings


@pytest.mark.parametrize("window", [0, -3])
def test_profit_signal_window_must_be_positive(window):
    with pytest.raises(ValidationError):
        Settings(PROFIT_SIGNAL_WINDOW_DAYS=window)


def test_page_sizes_must_be_positive():
    with pytest.raises(ValidationError):
        Settings(MAX_PAGE_SIZE=0)
    with pytest.raises(ValidationError):
        Settings(DEFAULT_PAGE_SIZE=-1)
