"""Gateway 启动入口 -- python -m taskboard.gateway"""

import uvicorn
from taskboard.core.config import get_bind


def main() -> None:
    host, port = get_bind()
    # 日志由 setup_logging 统一配置
    uvicorn.run(
        "taskboard.gateway.main:app",
        host=host,
        port=port,
        log_config=None,
        access_log=False,
    )


if __name__ == "__main__":
    main()
