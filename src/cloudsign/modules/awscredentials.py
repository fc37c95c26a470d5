class AWSCredentials(object):
    """
    The AWSCredentials object encapsulates the credentials used for signing requests.

    Keyword arguments:
    access_key -- the AWS access key ID  (default None)
    secret_key -- the AWS secret key (default None)
    token -- the temporary security token obtained through a call to
             AWS Security Token Service (default None)
    """

    def __init__(self, access_key=None, secret_key=None, token=None):
        self.access_key = access_key
        self.secret_key = secret_key
        self.token = token

    def is_complete(self):
        """ True if both the access key and the secret key are present """
        return bool(self.access_key) and bool(self.secret_key)

    def __repr__(self):
        # never render the secret or the token
        return "AWSCredentials(access_key=%r)" % self.access_key
