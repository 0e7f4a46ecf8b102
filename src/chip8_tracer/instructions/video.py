# src/chip8_tracer/instructions/video.py
"""
画面命令（クリア、スプライト描画）の実装。
"""
from chip8_tracer.core.state import Chip8System, StepContext
from .base import Instruction, Op, Word


# @intent:responsibility DXYN (スプライト描画) をデコードします。Nはスプライトの行数です。
def decode_draw_sprite(word: Word) -> Instruction:
    return Instruction(Op.DRAW_SPRITE, x=word.x, y=word.y, value=word.n)


def execute_clear_screen(system: Chip8System, ctx: StepContext, ins: Instruction) -> None:
    system.framebuffer.clear()

# @intent:responsibility Iから読んだN行のスプライトを(VX, VY)に描画し、衝突の有無をVFに設定します。
# @intent:rationale 開始座標はラップせず、画面外のピクセルはフレームバッファ側で捨てられます。
def execute_draw_sprite(system: Chip8System, ctx: StepContext, ins: Instruction) -> None:
    regs = system.registers
    sprite = system.memory.read_bytes(regs.index, ins.value)
    x = regs.get_value(ins.x)
    y = regs.get_value(ins.y)
    collision = system.framebuffer.draw_sprite(x, y, sprite)
    regs.set_flag(collision)
