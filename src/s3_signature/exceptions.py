class S3SignatureError(Exception):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ConfigurationError(S3SignatureError):
    def __init__(self, field: str, message: str | None = None):
        if message is None:
            message = f'Parameter "{field}" is mandatory in the constructor.'
        super().__init__(message)
        self.field = field


class MissingHeaderError(S3SignatureError):
    def __init__(self, header: str = "x-amz-content-sha256"):
        super().__init__(f'Header "{header}" is required to build a canonical request')
        self.header = header


class EncodingError(S3SignatureError):
    pass
