"""Typed failures raised while fetching and reading forecast data."""


class ForecastError(Exception):
    """Base class for every recoverable forecast failure."""


class NetworkError(ForecastError):
    """The forecast provider could not be reached."""


class NonSuccessStatusError(ForecastError):
    def __init__(self, status_code: int, body: str):
        super().__init__(f"HTTP {status_code}: {body}")
        self.status_code = status_code
        self.body = body


class MissingFieldError(ForecastError):
    def __init__(self, name: str):
        super().__init__(f"field is missing: {name}")
        self.name = name


class ArrayIndexError(ForecastError):
    def __init__(self, index: int, length: int):
        super().__init__(f"error accessing daily point {index} of {length}")
        self.index = index
        self.length = length


class ParseError(ForecastError):
    """The provider response could not be decoded into a snapshot."""
