"""Service-layer exceptions."""


class NotFoundError(LookupError):
    """A referenced cohort, user or effort record does not exist."""

    def __init__(self, entity: str, entity_id=None):
        self.entity = entity
        self.entity_id = entity_id
        if entity_id is None:
            message = f"{entity} not found"
        else:
            message = f"{entity} {entity_id} not found"
        super().__init__(message)
