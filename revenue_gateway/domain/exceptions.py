"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class SourceAPIError(DomainException):
    """External data provider returned an error or unusable data"""

    pass


class ApplicationNotFoundError(DomainException):
    """No application exists for the given identifier"""

    def __init__(self, application_id: str):
        super().__init__(f"Application {application_id} not found")
        self.application_id = application_id
