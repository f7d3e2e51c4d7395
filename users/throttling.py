"""
Rate limiting for the users app.

`MeView` authenticates callers that may not have a local user row yet, so
their principal has no primary key.  Throttling on the verified subject
keeps every new user in a bucket of their own.
"""
from rest_framework.throttling import UserRateThrottle


class SubjectRateThrottle(UserRateThrottle):
    def get_cache_key(self, request, view):
        uid = getattr(request.user, "uid", None)
        if not uid:
            return super().get_cache_key(request, view)
        return self.cache_format % {"scope": self.scope, "ident": f"subject:{uid}"}
