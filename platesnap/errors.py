"""Request-terminating failures.

Every handler stage raises one of these; ``platesnap.main`` renders them as
``{"error": message}`` with the class's status code.
"""


class PlateSnapError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ClientInputError(PlateSnapError):
    """Missing/invalid file, blank imageUrl, disallowed MIME type."""
    status_code = 400


class UpstreamFetchError(PlateSnapError):
    """The caller-supplied image URL could not be fetched."""
    status_code = 400


class ServerConfigError(PlateSnapError):
    status_code = 500


class UpstreamContractViolation(PlateSnapError):
    """The model replied with something other than the requested JSON shape."""
    status_code = 500


class ModelInvocationError(PlateSnapError):
    status_code = 500


class InternalIOError(PlateSnapError):
    status_code = 500


class UpstreamTimeoutError(PlateSnapError):
    """An outbound call (image fetch or model) exceeded its timeout."""
    status_code = 504
