import httpx


def async_client(timeout=10.0, verify=True, follow_redirects=True, user_agent=None):
    headers = {"User-Agent": user_agent} if user_agent else None
    return httpx.AsyncClient(
        timeout=timeout,
        verify=verify,
        follow_redirects=follow_redirects,
        headers=headers,
    )
