"""
Static completion vocabularies for .http documents.

Every table is declared as data and built once at import. Adding a header
field or a request variant is a change to the tables below, never to the
lookup functions.
"""

from mimetypes import MimeTypes

from httpls.completion.candidate import CandidateKind, CompletionCandidate
from httpls.context.types import RequestVariant


REQUEST_METHODS: tuple[tuple[str, str], ...] = (
    ("GET", "The GET method requests a representation of the specified resource. Requests using GET should only retrieve data."),
    ("HEAD", "The HEAD method asks for a response identical to a GET request, but without the response body."),
    ("POST", "The POST method is used to submit an entity to the specified resource, often causing a change in state or side effects on the server."),
    ("PUT", "The PUT method replaces all current representations of the target resource with the request payload."),
    ("DELETE", "The DELETE method deletes the specified resource."),
    ("CONNECT", "The CONNECT method establishes a tunnel to the server identified by the target resource."),
    ("OPTIONS", "The OPTIONS method is used to describe the communication options for the target resource."),
    ("TRACE", "The TRACE method performs a message loop-back test along the path to the target resource."),
    ("PATCH", "The PATCH method is used to apply partial modifications to a resource."),
    ("MQTT", "MQTT request"),
    ("WSS", "WSS request"),
    ("SSE", "Server Sent Event"),
    ("GRPC", "GRPC request"),
)

HTTP_HEADERS: tuple[tuple[str, str], ...] = (
    ("A-IM", "Acceptable instance-manipulations for the request."),
    ("Accept", "Media type(s) that is/are acceptable for the response. See Content negotiation."),
    ("Accept-Charset", "Character sets that are acceptable."),
    ("Accept-Datetime", "Acceptable version in time."),
    ("Accept-Encoding", "List of acceptable encodings. See HTTP compression."),
    ("Accept-Language", "List of acceptable human languages for response. See Content negotiation."),
    ("Access-Control-Request-Method", "Initiates a request for cross-origin resource sharing with Origin."),
    ("Access-Control-Request-Headers", "Initiates a request for cross-origin resource sharing with Origin."),
    ("Authorization", "Authentication credentials for HTTP authentication."),
    ("Cache-Control", "Used to specify directives that must be obeyed by all caching mechanisms along the request-response chain."),
    ("Connection", "Control options for the current connection and list of hop-by-hop request fields. Must not be used with HTTP/2."),
    ("Content-Encoding", "The type of encoding used on the data. See HTTP compression."),
    ("Content-Length", "The length of the request body in octets (8-bit bytes)."),
    ("Content-MD5", "A Base64-encoded binary MD5 sum of the content of the request body."),
    ("Content-Type", "The Media type of the body of the request (used with POST and PUT requests)."),
    ("Cookie", "An HTTP cookie previously sent by the server with Set-Cookie."),
    ("Date", "The date and time at which the message was originated (in \"HTTP-date\" format as defined by RFC 7231)."),
    ("Expect", "Indicates that particular server behaviors are required by the client."),
    ("Forwarded", "Disclose original information of a client connecting to a web server through an HTTP proxy."),
    ("From", "The email address of the user making the request."),
    ("Host", "The domain name of the server (for virtual hosting), and the TCP port number on which the server is listening. Mandatory since HTTP/1.1."),
    ("HTTP2-Settings", "A request that upgrades from HTTP/1.1 to HTTP/2 MUST include exactly one HTTP2-Settings header field with the parameters that govern the HTTP/2 connection."),
    ("If-Match", "Only perform the action if the client supplied entity matches the same entity on the server."),
    ("If-Modified-Since", "Allows a 304 Not Modified to be returned if content is unchanged."),
    ("If-None-Match", "Allows a 304 Not Modified to be returned if content is unchanged, see HTTP ETag."),
    ("If-Range", "If the entity is unchanged, send me the part(s) that I am missing; otherwise, send me the entire new entity."),
    ("If-Unmodified-Since", "Only send the response if the entity has not been modified since a specific time."),
    ("Max-Forwards", "Limit the number of times the message can be forwarded through proxies or gateways."),
    ("Origin", "Initiates a request for cross-origin resource sharing (asks server for Access-Control-* response fields)."),
    ("Pragma", "Implementation-specific fields that may have various effects anywhere along the request-response chain."),
    ("Proxy-Authorization", "Authorization credentials for connecting to a proxy."),
    ("Range", "Request only part of an entity. Bytes are numbered from 0. See Byte serving."),
    ("Referer", "This is the address of the previous web page from which a link to the currently requested page was followed."),
    ("TE", "The transfer encodings the user agent is willing to accept. Only trailers is supported in HTTP/2."),
    ("Trailer", "Indicates that the given set of header fields is present in the trailer of a message encoded with chunked transfer coding."),
    ("Transfer-Encoding", "The form of encoding used to safely transfer the entity to the user: chunked, compress, deflate, gzip, identity. Must not be used with HTTP/2."),
    ("User-Agent", "The user agent string of the user agent."),
    ("Upgrade", "Ask the server to upgrade to another protocol. Must not be used in HTTP/2."),
    ("Via", "Informs the server of proxies through which the request was sent."),
    ("Warning", "A general warning about possible problems with the entity body."),
    ("Upgrade-Insecure-Requests", "Tells a server that the client would prefer redirection to HTTPS and can handle Content-Security-Policy: upgrade-insecure-requests. Must not be used with HTTP/2."),
    ("X-Requested-With", "Mainly used to identify Ajax requests; most JavaScript frameworks send this field with value of XMLHttpRequest."),
    ("DNT", "Requests a web application to disable their tracking of a user."),
    ("X-Forwarded-For", "A de facto standard for identifying the originating IP address of a client connecting through an HTTP proxy or load balancer. Superseded by Forwarded header."),
    ("X-Forwarded-Host", "A de facto standard for identifying the original host requested by the client in the Host HTTP request header. Superseded by Forwarded header."),
    ("X-Forwarded-Proto", "A de facto standard for identifying the originating protocol of an HTTP request. Superseded by Forwarded header."),
    ("Front-End-Https", "Non-standard header field used by Microsoft applications and load-balancers."),
    ("X-Http-Method-Override", "Requests a web application to override the method specified in the request (typically POST) with the method given in the header field (typically PUT or DELETE)."),
    ("X-ATT-DeviceId", "Allows easier parsing of the MakeModel/Firmware that is usually found in the User-Agent String of AT&T Devices."),
    ("X-Wap-Profile", "Links to an XML file on the Internet with a full description and details about the device currently connecting."),
    ("Proxy-Connection", "Has exactly the same functionality as standard Connection field. Must not be used with HTTP/2."),
    ("X-UIDH", "Server-side deep packet insertion of a unique ID identifying customers of Verizon Wireless."),
    ("X-Csrf-Token", "Used to prevent cross-site request forgery. Alternative header names are: X-CSRFToken and X-XSRF-TOKEN."),
    ("X-Request-ID", "Correlates HTTP requests between a client and server."),
    ("X-Correlation-ID", "Correlates HTTP requests between a client and server."),
    ("Save-Data", "The Save-Data client hint lets developers deliver lighter, faster applications to users who opt-in to data saving mode in their browser."),
)

MQTT_FIELDS: tuple[tuple[str, str], ...] = (
    ("username", "the username required by your broker"),
    ("password", "the password required by your broker"),
    ("clean", "true, set to false to receive QoS 1 and 2 messages while offline"),
    ("keepalive", "10 seconds, set to 0 to disable"),
    ("QoS", "the QoS used for subscribe or publish"),
    ("retain", "the retain flag used for publish"),
    ("subscribe", "topics to subscribe to"),
    ("publish", "topics to publish to"),
    ("topic", "topic to subscribe and publish to"),
)

EVENT_SOURCE_FIELDS: tuple[tuple[str, str], ...] = (
    ("Event", "Server Sent Events to add listener"),
)

GRPC_FIELDS: tuple[tuple[str, str], ...] = (
    ("ChannelCredentials", "Channel credentials, which are attached to a Channel, such as SSL credentials."),
)

AUTH_SCHEMES: tuple[tuple[str, str], ...] = (
    ("Basic", "Basic Authentication"),
    ("Digest", "Digest Authentication"),
    ("AWS", "AWS Signature v4"),
    ("OAuth2", "OAuth2"),
    ("OpenId", "OpenId"),
    ("Bearer", "Bearer Authentication"),
)

FORM_URLENCODED = "application/x-www-form-urlencoded"


def _candidates(
    entries: tuple[tuple[str, str], ...], kind: CandidateKind
) -> tuple[CompletionCandidate, ...]:
    return tuple(CompletionCandidate(name, description, kind) for name, description in entries)


def _mime_type_entries() -> tuple[tuple[str, str], ...]:
    # A fresh MimeTypes only holds the built-in map, never the host's mime.types files
    types_map = MimeTypes().types_map[True]
    entries = tuple((content_type, ext) for ext, content_type in types_map.items())
    return entries + ((FORM_URLENCODED, FORM_URLENCODED),)


_METHOD_TABLE = _candidates(REQUEST_METHODS, CandidateKind.KEYWORD)

_HEADER_TABLES: dict[RequestVariant, tuple[CompletionCandidate, ...]] = {
    RequestVariant.HTTP: _candidates(HTTP_HEADERS, CandidateKind.FIELD),
    RequestVariant.MQTT: _candidates(MQTT_FIELDS, CandidateKind.FIELD),
    RequestVariant.EVENT_SOURCE: _candidates(EVENT_SOURCE_FIELDS, CandidateKind.FIELD),
    RequestVariant.GRPC: _candidates(GRPC_FIELDS, CandidateKind.FIELD),
}

_MIME_TYPE_TABLE = _candidates(_mime_type_entries(), CandidateKind.VALUE)

_AUTH_SCHEME_TABLE = _candidates(AUTH_SCHEMES, CandidateKind.VALUE)


def method_table() -> tuple[CompletionCandidate, ...]:
    """Request methods followed by the protocol selectors."""
    return _METHOD_TABLE


def header_table(variant: RequestVariant | None) -> tuple[CompletionCandidate, ...]:
    """Header fields of a request variant, empty for an unknown variant."""
    if variant is None:
        return ()
    return _HEADER_TABLES.get(variant, ())


def mime_type_table() -> tuple[CompletionCandidate, ...]:
    return _MIME_TYPE_TABLE


def auth_scheme_table() -> tuple[CompletionCandidate, ...]:
    return _AUTH_SCHEME_TABLE
