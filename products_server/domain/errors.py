# products_server/domain/errors.py

class ConfigError(RuntimeError):
    """Startup precondition failed; the process must not serve."""


class StoreUnavailableError(RuntimeError):
    """MongoDB could not be reached at startup."""


class ProductError(Exception):
    status_code = 500
    message = "Internal Server Error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class InvalidProductIdError(ProductError):
    status_code = 400
    message = "Invalid product ID"


class InvalidBodyError(ProductError):
    status_code = 400
    message = "Invalid request body"


class ProductNotFoundError(ProductError):
    status_code = 404
    message = "Product not found"


class NoProductsFoundError(ProductError):
    status_code = 404
    message = "No products found"
