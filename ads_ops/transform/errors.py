"""
Operation normalization errors.

All of these describe bad caller input. Each one carries the zero-based
position of the offending operation; the batch is rejected as a whole.
"""


class OperationFormatError(ValueError):
    """Raised when an operation cannot be normalized."""

    def __init__(self, index: int, reason: str):
        self.index = index
        self.reason = reason
        super().__init__(f"Operation {index}: {reason}")


class InvalidOperationError(OperationFormatError):
    """Operation has no create/update/remove key and is not canonical."""

    def __init__(self, index: int):
        super().__init__(
            index,
            'Invalid format. Expected { create: {...} }, { update: {...} }, { remove: "..." }, '
            'or canonical format { entity: "...", operation: "...", resource: {...} }',
        )


class InvalidPayloadError(OperationFormatError):
    """Verb value has the wrong type."""

    def __init__(self, index: int, verb: str):
        self.verb = verb
        if verb == "remove":
            reason = "'remove' value must be a resource_name string"
        else:
            reason = f"'{verb}' value must be an object"
        super().__init__(index, reason)


class UnresolvedEntityError(OperationFormatError):
    """Entity type could not be inferred and no _entity hint was given."""

    def __init__(self, index: int, verb: str):
        self.verb = verb
        super().__init__(
            index,
            "Could not infer entity type. Please use canonical format: "
            f'{{ entity: "campaign", operation: "{verb}", resource: {{...}} }} '
            'or add "_entity" field to your operation.',
        )
