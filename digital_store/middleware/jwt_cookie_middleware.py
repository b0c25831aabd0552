from django.utils.deprecation import MiddlewareMixin


class JWTAuthCookieMiddleware(MiddlewareMixin):
    """
    Copy the access token cookie set at login into the Authorization header
    so JWTAuthentication sees it. An explicit header always wins.
    """
    COOKIE_NAMES = ("access_token", "access")

    def process_request(self, request):
        if request.META.get("HTTP_AUTHORIZATION"):
            return None
        for name in self.COOKIE_NAMES:
            token = request.COOKIES.get(name)
            if token:
                request.META["HTTP_AUTHORIZATION"] = f"Bearer {token}"
                break
        return None
