from datetime import datetime, timezone

AWS_TIMESTAMP_FORMAT = '%Y%m%dT%H%M%SZ'
AWS_DATESTAMP_FORMAT = '%Y%m%d'


def get_request_time():
    """
    Captures the current instant in UTC. A signing attempt calls this exactly once
    and derives every timestamp and datestamp from the returned value.
    """
    return datetime.now(timezone.utc)


def get_aws_timestamp(request_time=None):
    """
    Returns timestamp expressed in the format YYYYMMDDThhmmssZ,
    as specified in the ISO 8601 standard.
    """
    return _to_utc(request_time).strftime(AWS_TIMESTAMP_FORMAT)


def get_datestamp(request_time=None):
    return _to_utc(request_time).strftime(AWS_DATESTAMP_FORMAT)


def _to_utc(request_time):
    if request_time is None:
        return get_request_time()
    if request_time.tzinfo is None:
        return request_time.replace(tzinfo=timezone.utc)
    return request_time.astimezone(timezone.utc)
