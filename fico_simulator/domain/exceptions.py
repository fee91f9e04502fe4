"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class AnalysisServiceError(DomainException):
    """Document analysis service timed out, failed, or sent an unusable body"""

    pass


class SessionNotFoundError(DomainException):
    """No open simulation session for the id (never created, closed or evicted)"""

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"Simulation session not found: {session_id}")


class UnknownAdjustmentFieldError(DomainException):
    """Adjustment field is not utilization_percent, inquiries or late_payments"""

    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__(f"Unknown adjustment field: {field_name}")
