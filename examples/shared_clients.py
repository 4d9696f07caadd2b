import logging
import os
from concurrent.futures import ThreadPoolExecutor

from athenadriver.client_cache import ClientCache
from athenadriver.config import Config
from athenadriver.connector import SQLConnector
from athenadriver.constants import Metrics
from athenadriver.telemetry import InMemoryScope

logging.basicConfig(level=logging.DEBUG)

# Connections built from the same credentials share one Athena client.
cache = ClientCache()
scope = InMemoryScope()
connector = SQLConnector(
    Config.from_dsn(os.getenv("ATHENA_DSN", "s3://my-query-results/?region=us-east-1")),
    client_cache=cache,
)

with ThreadPoolExecutor(max_workers=8) as pool:
    connections = list(pool.map(lambda _: connector.connect(scope=scope), range(32)))

print(f"cached clients: {cache.keys()}")
print(f"connect timings: {len(scope.timer_values(Metrics.CONNECT_TIMER))}")
for connection in connections:
    connection.close()
