#!/usr/bin/env python3
"""
WCS Core Demo - Simple example application.

Plays a scripted operator session through the runner and logs every
state change along with the wheel command it implies.
"""

import asyncio
import logging
import sys
from typing import Optional

from wcs_config import WcsConfig
from wcs_core.mapper import Mapper
from wcs_core.runner import SupervisorRunner
from wcs_core.supervisor import ControlSupervisor
from wcs_core.types import DeviceState, MapperConfig, RunnerConfig, SupervisorConfig
from wcs_input import MockInput, TestScripts


logger = logging.getLogger(__name__)


async def run_demo(config: Optional[WcsConfig] = None) -> DeviceState:
    """Run the demo session and return the final snapshot"""

    logger.info("=" * 60)
    logger.info("WCS Core Demo")
    logger.info("=" * 60)

    if config is not None:
        supervisor_config = config.supervisor_config()
        mapper_config = config.mapper_config()
    else:
        supervisor_config = SupervisorConfig()
        mapper_config = MapperConfig()

    supervisor = ControlSupervisor(supervisor_config)
    mapper = Mapper(mapper_config)

    # Drain ten times faster than real time so the demo shows it
    runner_config = RunnerConfig(loop_interval=0.2, tick_interval=0.1)
    input_provider = MockInput(intents=TestScripts.full_session())
    runner = SupervisorRunner(supervisor, input_provider, runner_config)

    def on_state_change(old_state: DeviceState, new_state: DeviceState) -> None:
        frame = mapper.map(new_state)
        logger.info(
            f"STATE: {new_state.describe()} | "
            f"wheels L={frame.left_speed:+4d} R={frame.right_speed:+4d}"
        )

    supervisor.add_state_callback(on_state_change)

    logger.info("Starting runner...")
    runner_task = asyncio.create_task(runner.run())

    while not input_provider.exhausted:
        await asyncio.sleep(0.2)
    await asyncio.sleep(0.5)

    runner.stop()
    await runner_task

    final = supervisor.current_state()
    logger.info("-" * 60)
    logger.info(
        f"Final: {final.describe()} | "
        f"battery band: {final.power_band.value} ({final.power_percent}%)"
    )
    logger.info(f"Intents dispatched: {runner.intent_count}")
    logger.info("=" * 60)
    return final


def main():
    """Main entry point"""
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stdout
    )

    try:
        asyncio.run(run_demo())
    except KeyboardInterrupt:
        logger.info("\nDemo interrupted by user")
    except Exception as e:
        logger.error(f"Demo failed: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
