"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services contain business logic that doesn't naturally belong
    to a single entity or spans multiple entities/aggregates.
    """

    pass
