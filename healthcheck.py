"""
Health check script for the Docker container.
Performs an HTTP request against the /health endpoint.
"""

import os
import sys
import urllib.error
import urllib.request


def check(port: str, timeout: float = 3.0) -> int:
    url = f"http://localhost:{port}/health"
    try:
        with urllib.request.urlopen(url, timeout=timeout) as response:
            status = response.status
    except urllib.error.HTTPError as e:
        status = e.code
    except (urllib.error.URLError, TimeoutError, OSError) as e:
        print(f"Health check failed: {e}")
        return 1

    if status == 200:
        print("Health check passed")
        return 0
    print(f"Health check failed with status: {status}")
    return 1


if __name__ == "__main__":
    sys.exit(check(os.getenv("PORT", "3000")))
