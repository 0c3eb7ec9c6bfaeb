# run.py
import os
import sys

import uvicorn

# 현재 파일 기준 루트 디렉토리를 모듈 경로로 등록
BASE_DIR = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, BASE_DIR)

from config import Settings  # noqa: E402


def main() -> None:
    settings = Settings.from_env()
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development,
        proxy_headers=True,
        forwarded_allow_ips="*",
        timeout_keep_alive=settings.keep_alive_timeout,
        timeout_graceful_shutdown=10,
    )


if __name__ == "__main__":
    main()
