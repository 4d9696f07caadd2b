import athenadriver
import os
import logging


logger = logging.getLogger("athenadriver")
logger.setLevel(logging.DEBUG)
fh = logging.FileHandler("athenadriver.log")
fh.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(process)d %(thread)d %(message)s"))
fh.setLevel(logging.DEBUG)
logger.addHandler(fh)

with athenadriver.connect(
    output_bucket=os.getenv("ATHENA_OUTPUT_BUCKET", ""),
    region=os.getenv("AWS_REGION", "us-east-1"),
    workgroup_name=os.getenv("ATHENA_WORKGROUP", "primary"),
    wg_remote_creation=True,
) as connection:
    created = connection.ensure_workgroup()
    print(f"workgroup {connection.config.workgroup_name} created: {created}")
