"""
Run the opportunity monitor until interrupted.

    python -m morpheus
"""

import asyncio

from shared import ComponentLogger, configure_logging, get_config

from .monitor import OpportunityMonitor
from .pipeline import ArbitragePipeline


async def run() -> None:
    config = get_config()
    configure_logging(
        level=config.monitoring.log_level,
        json_format=config.monitoring.json_logs or config.is_production(),
    )
    logger = ComponentLogger("MORPHEUS")

    pipeline = ArbitragePipeline.from_config(config)
    monitor = OpportunityMonitor(pipeline, interval_s=config.update_interval_s)
    monitor.start()
    logger.info("arbscan running", assets=config.assets, environment=config.environment)

    try:
        await monitor.wait_closed()
    finally:
        monitor.stop()


def main() -> None:
    try:
        asyncio.run(run())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
