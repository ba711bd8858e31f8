class UnpluggedError(Exception):
    pass


class InvalidInput(UnpluggedError):
    pass


class InsufficientPoints(UnpluggedError):
    def __init__(self, balance: int, required: int):
        super().__init__(f"need {required} points, have {balance}")
        self.balance = balance
        self.required = required


class PersistenceFailure(UnpluggedError):
    def __init__(self, path: str, reason: str):
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason
