class InvalidCarrierError(ValueError):
    def __init__(self, carrier):
        self.carrier = carrier
        self.message = f"Invalid carrier: {carrier}"
        super().__init__(self.message)

    def __str__(self):
        return self.message


class ZoneMatrixError(Exception):
    """The zone matrix holds data that cannot be turned into a zone."""


class ZoneMatrixIndexError(ZoneMatrixError, IndexError):
    def __init__(self, prefix, index, size):
        self.prefix = prefix
        self.index = index
        self.size = size
        self.message = (
            f"Zone matrix for prefix {prefix} has no entry at index {index} "
            f"(size {size})"
        )
        super().__init__(self.message)

    def __str__(self):
        return self.message


class SequenceError(Exception):
    pass


class CarrierInterfaceError(Exception):
    def __init__(self, carrier, message):
        self.carrier = carrier
        self.message = f"{carrier}: {message}"
        super().__init__(self.message)

    def __str__(self):
        return self.message
