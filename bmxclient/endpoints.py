"""API-relative endpoint paths, appended to the configured base URL."""

POSITION = "/position"
ORDER = "/order"
INSTRUMENT = "/instrument"
QUOTE = "/quote"
TRADE = "/trade"
USER = "/user"
