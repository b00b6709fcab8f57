"""
Constants for the URI signer library.
"""

# Query string key carrying the token
DEFAULT_PARAMETER = "_hash"

# Default validity window in seconds (1 day)
DEFAULT_EXPIRATION = 24 * 60 * 60

# Key injected into the query map while computing the digest; never
# present in a signed URI
EXPIRATION_KEY = "expiration"

# Token JSON fields
TOKEN_FIELD_EXPIRATION = "expiration"
TOKEN_FIELD_SIGNATURE = "hashed"

# Default configuration values
DEFAULT_CONFIG = {
    'parameter': DEFAULT_PARAMETER,
    'expiration': DEFAULT_EXPIRATION,
}

# Environment variables read by SignerConfig.from_env / UriSigner.from_env
ENV_SECRET = "URI_SIGNER_SECRET"
ENV_PARAMETER = "URI_SIGNER_PARAMETER"
ENV_EXPIRATION = "URI_SIGNER_EXPIRATION"
