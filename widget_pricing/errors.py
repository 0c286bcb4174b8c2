class PricingError(Exception):
    """Base class for everything the pricing engine raises."""


class InvalidProduct(PricingError, ValueError):
    def __init__(self, code: str, message: str = ""):
        self.code = code
        super().__init__(message or f"Product {code} does not exist")


class ProductNotFound(PricingError, KeyError):
    def __init__(self, code: str):
        self.code = code
        super().__init__(code)

    def __str__(self) -> str:
        return f"Product {self.code} not found"


class InvalidBundleDefinition(PricingError, ValueError):
    pass


class InvalidDeliveryRule(PricingError, ValueError):
    pass


class ConfigError(PricingError):
    pass
