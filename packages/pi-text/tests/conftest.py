import pytest

from pi.text.config import TextConfig, set_text_config
from pi.text.symbols import NumberSymbols, set_number_symbols


@pytest.fixture(autouse=True)
def default_settings():
    """Every test starts from the default config and number symbols."""
    set_text_config(TextConfig())
    set_number_symbols(NumberSymbols())
    yield
    set_text_config(TextConfig())
    set_number_symbols(NumberSymbols())
