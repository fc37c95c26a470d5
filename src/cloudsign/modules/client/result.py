class Result(object):
    """
    Outcome of a signing attempt: either a value or the error which prevented it.
    """

    def __init__(self, value=None, error=None):
        self.value = value
        self.error = error

    @classmethod
    def success(cls, value):
        return cls(value=value)

    @classmethod
    def failure(cls, error):
        return cls(error=error)

    @property
    def is_success(self):
        return self.error is None

    def unwrap(self):
        """ Returns the value or raises the stored error """
        if self.error is not None:
            raise self.error
        return self.value

    def __repr__(self):
        if self.is_success:
            return "Result.success(%r)" % (self.value,)
        return "Result.failure(%r)" % (self.error,)
