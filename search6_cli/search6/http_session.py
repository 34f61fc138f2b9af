import aiohttp

_session: aiohttp.ClientSession | None = None


def get_session() -> aiohttp.ClientSession:
    global _session
    if _session and not _session.closed:
        return _session
    connector = aiohttp.TCPConnector(limit=1)
    _session = aiohttp.ClientSession(connector=connector)
    return _session

async def close_session():
    global _session
    if _session and not _session.closed:
        await _session.close()
    _session = None
