import uuid
import time
from fastapi import Request
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware
from framework.logging.logger import _current_request

TRACE_HEADER = "X-Trace-ID"

class LoggingMiddleware(BaseHTTPMiddleware):
    """Assigns a trace id per request and logs start, finish and failure."""

    async def dispatch(self, request: Request, call_next):
        trace_id = request.headers.get(TRACE_HEADER) or uuid.uuid4().hex
        request.state.trace_id = trace_id
        token = _current_request.set(request)

        with logger.contextualize(trace_id=trace_id):
            start_time = time.perf_counter()
            logger.info(f"Request Started | {request.method} {request.url.path}")

            try:
                response = await call_next(request)
            except Exception as e:
                elapsed = (time.perf_counter() - start_time) * 1000
                logger.error(f"Request Failed | Error: {str(e)} | Duration: {elapsed:.2f}ms")
                raise
            finally:
                _current_request.reset(token)

            elapsed = (time.perf_counter() - start_time) * 1000
            level = "WARNING" if response.status_code >= 500 else "INFO"
            logger.log(level, f"Request Finished | Status: {response.status_code} | Duration: {elapsed:.2f}ms")
            response.headers[TRACE_HEADER] = trace_id
            return response
