class BaroformError(Exception):
    status_code = 500

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(BaroformError):
    status_code = 400


class NotFoundError(BaroformError):
    status_code = 404
