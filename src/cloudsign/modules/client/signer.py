import hmac

from datetime import datetime
from hashlib import sha256

from ..awsutils import get_aws_timestamp, get_datestamp
from .request import CredentialScope, V4_TERMINATOR


class Signer(object):
    """
    The signer is responsible for creating v4 signatures and the Authorization header value.
    It keeps no state besides the algorithm name, so a single instance can sign any number
    of requests concurrently. Signing keys are returned to the caller and never retained.

    Keyword arguments:
    algorithm -- The algorithm identifier placed in the string to sign and the Authorization header
    """

    ALGORITHM = "AWS4-HMAC-SHA256"
    _KEY_PREFIX = "AWS4"

    def __init__(self, algorithm=ALGORITHM):
        self.algorithm = algorithm

    def derive_signing_key(self, secret_key, request_date, region, service):
        """
        Derives the signing key scoped to date, region and service:
        http://docs.aws.amazon.com/general/latest/gr/sigv4-calculate-signature.html
        """
        k_date = self.sign((self._KEY_PREFIX + secret_key).encode("utf-8"), self._to_datestamp(request_date))
        k_region = self.sign(k_date, region)
        k_service = self.sign(k_region, service)
        return self.sign(k_service, V4_TERMINATOR)

    def build_string_to_sign(self, timestamp, region, service, hashed_canonical_request):
        """ Creates string required for deriving signature """
        credential_scope = CredentialScope.from_timestamp(timestamp, region, service)
        return "\n".join([self.algorithm, get_aws_timestamp(timestamp), str(credential_scope),
                          hashed_canonical_request])

    def assemble_authorization_header(self, access_key_id, signing_key, string_to_sign, credential_scope,
                                      signed_headers):
        signature = self.compute_signature(signing_key, string_to_sign)
        return (self.algorithm + " Credential=" + access_key_id + "/" + str(credential_scope)
                + ", SignedHeaders=" + signed_headers + ", Signature=" + signature)

    def compute_signature(self, signing_key, string_to_sign):
        return hmac.new(signing_key, string_to_sign.encode("utf-8"), sha256).hexdigest()

    def hash(self, data):
        if isinstance(data, str):
            data = data.encode("utf-8")
        return sha256(data).hexdigest()

    def sign(self, key, msg):
        if isinstance(key, str):
            key = key.encode("utf-8")
        return hmac.new(key, msg.encode("utf-8"), sha256).digest()

    def _to_datestamp(self, request_date):
        if isinstance(request_date, str):
            return request_date
        if isinstance(request_date, datetime):
            return get_datestamp(request_date)
        return request_date.strftime("%Y%m%d")
