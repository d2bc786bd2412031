class DispatchError(Exception):
    """Base class for dispatch store failures."""


class NotFoundError(DispatchError):
    def __init__(self, entity: str, entity_id):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found")


class PersistenceError(DispatchError):
    """The durable document could not be read or written."""
