CLIENT_IP_HEADER = "X-Client-IP"
FORWARDED_FOR_HEADER = "X-Forwarded-For"
PROXY_HEADERS = ["X-Real-IP", "X-Cluster-Client-IP", "X-Forwarded", "Forwarded-For", "Forwarded"]

IPV4_MAPPED_PREFIX = "::ffff:"
UNKNOWN_ADDRESS = "-"


def get_client_address(headers, remote_addr=None):
    """
    Best-effort client address, only used for logging.
    Checks X-Client-IP, then the first X-Forwarded-For hop, then the other
    proxy headers, then the transport peer address.
    """
    address = headers.get(CLIENT_IP_HEADER)
    if address:
        return address

    forwarded_for = headers.get(FORWARDED_FOR_HEADER)
    if forwarded_for:
        return forwarded_for.split(",")[0]

    for header in PROXY_HEADERS:
        value = headers.get(header)
        if value:
            return value

    return remote_addr or None


def normalize_address(address):
    if not address:
        return UNKNOWN_ADDRESS
    address = address.strip()
    if address.lower().startswith(IPV4_MAPPED_PREFIX) and "." in address:
        return address[len(IPV4_MAPPED_PREFIX):]
    return address or UNKNOWN_ADDRESS


def client_label(request):
    return normalize_address(get_client_address(request.headers, request.remote_addr))
