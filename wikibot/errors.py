class WikiError(Exception):
    pass

class InvalidTitle(WikiError):
    pass

class MalformedSiteInfo(WikiError):
    pass

class EmptySummary(WikiError):
    pass

class NotLoggedIn(WikiError):
    pass

class AuthenticationFailed(WikiError):
    pass

class TransportFailure(WikiError):
    pass

class ApiError(WikiError):
    def __init__(self, code, info=""):
        super().__init__(f"{code}: {info}" if info else code)
        self.code = code
        self.info = info
