"""Errors raised by backend service clients."""


class ServiceError(Exception):
    """A backend collaborator was unreachable or answered with garbage."""

    def __init__(self, service: str, message: str):
        super().__init__(f"{service}: {message}")
        self.service = service
        self.message = message
