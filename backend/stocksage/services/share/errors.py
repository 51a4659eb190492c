class ShareError(Exception):
    pass


class ShareValidationError(ShareError):
    pass


class MissingShareIdError(ShareError):
    pass


class ShareNotFoundError(ShareError):
    pass
