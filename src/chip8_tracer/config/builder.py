import logging
import random

from chip8_tracer.core.machine import Machine
from chip8_tracer.core.quirks import Quirks
from .models import EmulatorConfig

logger = logging.getLogger(__name__)

# @intent:responsibility 設定（Config）とプログラムイメージから、クワークと乱数源を構成したMachineを生成します。
class MachineBuilder:
    def build_machine(self, config: EmulatorConfig, program: bytes) -> Machine:
        quirks = Quirks.from_flag(config.quirks)

        # seedが指定されていれば再現可能な乱数列にする
        rng = random.Random(config.seed) if config.seed is not None else random.Random()

        logger.debug(
            "Building machine: quirks=%s, seed=%s, %d steps/frame",
            quirks.is_active, config.seed, config.steps_per_frame,
        )
        return Machine(program, quirks=quirks, rng=rng)
