"""Application errors.

Every error knows the HTTP status it maps to; the app factory registers a
single handler that turns them into JSON responses.
"""


class ApplicationError(Exception):
    status_code = 500

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> dict:
        return {'error': self.message}


class DatabaseQueryError(ApplicationError):
    """A repository call failed or found nothing."""

    def __init__(self, message: str, received_data=None, status_code: int = 500):
        super().__init__(message, status_code)
        self.received_data = received_data

    def __str__(self):
        return f'Database query error: {self.message}. Received data: {self.received_data!r}'

    def to_dict(self) -> dict:
        payload = super().to_dict()
        if self.received_data is not None:
            payload['received_data'] = self.received_data
        return payload


class BadClientRequest(ApplicationError):
    status_code = 400

    def __init__(self, message: str, bad_data=None):
        super().__init__(message)
        self.bad_data = bad_data

    def __str__(self):
        return f'Bad request was sent by a client! Error: {self.message} ... caused by: {self.bad_data!r}!'

    def to_dict(self) -> dict:
        payload = super().to_dict()
        if self.bad_data is not None:
            payload['bad_data'] = self.bad_data
        return payload


class ProcessError(ApplicationError):
    """A business rule could not be applied inside `name_of_function`."""

    def __init__(self, message: str, name_of_function: str, bad_data=None, status_code: int = 500):
        super().__init__(message, status_code)
        self.name_of_function = name_of_function
        self.bad_data = bad_data

    def __str__(self):
        return f'Message: {self.message}, Name of the Function: {self.name_of_function}, Possible invalid Data: {self.bad_data!r}'


class InvalidMessageError(ApplicationError):
    status_code = 400

    def __init__(self, message: str, origin_message=None):
        super().__init__(message)
        self.origin_message = origin_message

    def __str__(self):
        return f'A processed message was invalid! Error: {self.message} & Message object that caused the error: {self.origin_message!r}'

    def to_dict(self) -> dict:
        payload = super().to_dict()
        if self.origin_message is not None:
            payload['origin_message'] = self.origin_message
        return payload
