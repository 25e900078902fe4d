"""Domain errors raised by the investment workflows."""

from http import HTTPStatus


class InvestmentError(Exception):
    """Base class; ``status`` is the HTTP status the API answers with."""

    status = HTTPStatus.BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AuthenticationRequiredError(InvestmentError):
    status = HTTPStatus.UNAUTHORIZED

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)


class PackageNotFoundError(InvestmentError):
    status = HTTPStatus.NOT_FOUND

    def __init__(self, package_id: int):
        super().__init__("Investment package not found")
        self.package_id = package_id


class MinimumInvestmentError(InvestmentError):
    def __init__(self, minimum: float):
        super().__init__(f"Minimum investment amount is {minimum:.2f}")
        self.minimum = minimum


class InvestmentNotFoundError(InvestmentError):
    status = HTTPStatus.NOT_FOUND

    def __init__(self, investment_id: int):
        super().__init__("Investment not found")
        self.investment_id = investment_id


class InvestmentAccessError(InvestmentError):
    status = HTTPStatus.FORBIDDEN

    def __init__(self, investment_id: int):
        super().__init__("Not authorized")
        self.investment_id = investment_id


class InvestmentNotActiveError(InvestmentError):
    def __init__(self, investment_id: int):
        super().__init__("Investment is not active")
        self.investment_id = investment_id


class CalculationRangeError(InvestmentError):
    def __init__(self, message: str = "Projection is too large to calculate"):
        super().__init__(message)
