DRIVER_NAME = "athenadriver"

# Environment flag that delegates credential and region lookup to the AWS SDK
# (shared config/credentials files, instance metadata, AWS_* variables).
SDK_LOAD_CONFIG_ENV = "AWS_SDK_LOAD_CONFIG"

ATHENA_SERVICE_NAME = "athena"


class Metrics:
    CONNECT_TIMER = DRIVER_NAME + ".connector.connect"
    NEW_SESSION_FAILURE = DRIVER_NAME + ".failure.sqlconnector.newsession"
    WORKGROUP_CREATED = DRIVER_NAME + ".workgroup.created"
    WORKGROUP_GET_FAILURE = DRIVER_NAME + ".failure.workgroup.get"
