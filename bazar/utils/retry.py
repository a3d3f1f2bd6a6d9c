# bazar/utils/retry.py
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

#transient filesystem errors only, any other OSError is raised straight away
TRANSIENT_OS_ERRORS = (InterruptedError, BlockingIOError, TimeoutError)


def storage_retry():
    return retry(
        reraise=True,
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.1, min=0.1, max=1),
        retry=retry_if_exception_type(TRANSIENT_OS_ERRORS),
    )
