__author__ = "Roland Hedberg"
__version__ = "0.1.0"

JWT_BEARER = "urn:ietf:params:oauth:grant-type:jwt-bearer"
CLIENT_ASSERTION_TYPE = "urn:ietf:params:oauth:client-assertion-type:jwt-bearer"

ON_BEHALF_OF = "on_behalf_of"
OPENID_SCOPE = "openid"
