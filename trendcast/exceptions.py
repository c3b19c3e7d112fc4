# trendcast/exceptions.py

class ForecastError(Exception):
    pass


class InvalidSeries(ForecastError):
    pass


class InvalidHorizon(ForecastError):
    pass


class InvalidModel(ForecastError):
    pass


class InvalidParameter(ForecastError):
    pass
