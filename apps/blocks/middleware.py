from asgiref.sync import iscoroutinefunction
from django.utils.functional import SimpleLazyObject

from .services.context import RequestContext


class BlockContextMiddleware:
    """Attach a lazily built ``request.block_context`` to each request."""

    def __init__(self, get_response):
        self.get_response = get_response
        self._is_async = iscoroutinefunction(get_response)

    def __call__(self, request):
        if self._is_async:
            return self._acall(request)
        self._attach(request)
        return self.get_response(request)

    async def _acall(self, request):
        self._attach(request)
        return await self.get_response(request)

    @staticmethod
    def _attach(request):
        request.block_context = SimpleLazyObject(lambda: RequestContext.from_request(request))
