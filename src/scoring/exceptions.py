from src.common.exceptions import UpstreamException


class PromptParseError(UpstreamException):
    def __init__(self, message: str, raw_text: str):
        self.raw_text = raw_text
        super().__init__(message)
