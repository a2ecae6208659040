"""
Service context for log lines.

Identifies which process produced a log line when several replicas of the
service write to the same collector.
"""

from functools import lru_cache
import os
import socket


@lru_cache(maxsize=1)
def get_service_context() -> str:
    service_name = os.getenv('SERVICE_NAME', 'ticket-resale')
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')

    # Container hostnames are short ids; fall back to the PID locally
    if deploy_env == 'local_dev':
        instance = str(os.getpid())
    else:
        instance = socket.gethostname()[:12] or str(os.getpid())

    return f'{service_name}@{deploy_env}:{instance}'
