class HUOBIException(Exception):
    pass


class HUOBIClientException(HUOBIException):
    """The exchange answered but refused the operation."""

    def __init__(self, message, code=None):
        super().__init__(message)
        self.message = message
        self.code = code

    def __str__(self):
        if self.code is None:
            return 'HUOBIClientException: {}'.format(self.message)
        return 'HUOBIClientException(code={}): {}'.format(self.code, self.message)


class HUOBIAPIException(HUOBIException):

    def __init__(self, response):
        self.status_code = response.status_code
        self.message = response.reason
        self.response = response
        self.request = getattr(response, 'request', None)

    def __str__(self):
        return 'APIError(status_code={}): {}'.format(self.status_code, self.message)


class HUOBIRequestException(HUOBIException):

    def __init__(self, message):
        self.message = message

    def __str__(self):
        return 'HUOBIRequestException: {}'.format(self.message)
