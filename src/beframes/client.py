"""
HTTP client handing compiled jobs to the render farm scheduler.
"""
import logging
from typing import Any, Dict

import requests

from .models import CompiledJob

logger = logging.getLogger(__name__)


class SchedulerClient:
    """HTTP client for the farm scheduler"""

    def __init__(self, base_url: str = "http://127.0.0.1:8080/api/v3/", timeout: float = 30.0):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def submit_job(self, job: CompiledJob) -> Dict[str, Any]:
        """Submit a compiled job, returns the scheduler's job record"""
        url = f"{self.base_url}/jobs"
        payload = job.to_dict()

        logger.info("Submitting %d tasks to %s", len(job.tasks), url)
        response = requests.post(url, json=payload, timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    def get_status(self) -> Dict[str, Any]:
        """Get scheduler status"""
        url = f"{self.base_url}/status"
        response = requests.get(url, timeout=self.timeout)
        response.raise_for_status()
        return response.json()
