"""
chip8_tracer.core.machineモジュールの統合テスト。
プログラムイメージからマシンを構築し、step() を通して観測可能な振る舞いを検証します。
"""
import logging

import pytest

from chip8_tracer import Machine, Quirks
from chip8_tracer.common.errors import MemoryAccessFault, StackOverflowFault, StackUnderflowFault
from chip8_tracer.core.registers import Register
from chip8_tracer.transport.framebuffer import COLOR_OFF, COLOR_ON, HEIGHT, WIDTH

# @intent:test_suite フェッチ・デコード・実行・タイマー・PC更新のサイクル全体を検証します。

V0 = Register(0)
V1 = Register(1)
V2 = Register(2)
VF = Register(0xF)


def program(*words):
    data = bytearray()
    for word in words:
        data += word.to_bytes(2, "big")
    return bytes(data)


def run(machine, steps, keys=()):
    for _ in range(steps):
        machine.step(keys)


class StubRandom:
    """randrange() が与えられた値を順に返すスタブ。"""
    def __init__(self, *values):
        self._values = list(values)

    def randrange(self, stop):
        return self._values.pop(0)


class TestMachineConstruction:
    def test_initial_state(self):
        machine = Machine(program(0x00E0))
        assert machine.program_counter == 0x200
        assert machine.is_paused is False
        assert machine.cycle_count == 0
        assert machine.quirks == Quirks.inactive()
        assert machine.memory.read_word(0x200) == 0x00E0

    def test_program_too_large(self):
        with pytest.raises(MemoryAccessFault):
            Machine(bytes(3585))

    def test_empty_program_runs_into_end(self):
        machine = Machine(b"")
        machine.step()
        assert machine.is_paused
        assert machine.program_counter == 0x200


class TestMachineStep:
    def test_clear_then_loop_back(self):
        machine = Machine(program(0x00E0, 0x1200))
        machine.step()
        assert machine.program_counter == 0x202
        machine.step()
        assert not any(machine.framebuffer.pixels())
        assert machine.program_counter == 0x200
        assert machine.is_paused is False

    def test_self_jump_parks(self):
        machine = Machine(program(0x00E0, 0x1202))
        run(machine, 2)
        assert machine.program_counter == 0x202
        assert machine.is_paused
        run(machine, 10)
        assert machine.program_counter == 0x202
        assert machine.is_paused

    def test_end_program_parks(self):
        machine = Machine(program(0x6105, 0x0000))
        run(machine, 5)
        assert machine.program_counter == 0x202
        assert machine.registers.get_value(V1) == 5
        assert machine.is_paused

    def test_value_store_and_add(self):
        machine = Machine(program(0x6105, 0x7103))
        run(machine, 2)
        assert machine.registers.get_value(V1) == 0x08
        assert machine.program_counter == 0x204

    def test_skip_advances_four(self):
        machine = Machine(program(0x6142, 0x3142, 0x6201, 0x6302))
        run(machine, 2)
        assert machine.program_counter == 0x206
        machine.step()
        assert machine.registers.get_value(V2) == 0

    def test_call_and_return(self):
        # 0x200: CALL 0x206 / 0x202: LD V2, 0x01 / 0x204: JP 0x204
        # 0x206: LD V1, 0x07 / 0x208: RET
        machine = Machine(program(0x2206, 0x6201, 0x1204, 0x6107, 0x00EE))
        machine.step()
        assert machine.program_counter == 0x206
        assert machine.stack.frames() == [0x200]
        run(machine, 2)
        assert machine.program_counter == 0x202
        assert machine.stack.depth == 0
        run(machine, 2)
        assert machine.registers.get_value(V1) == 0x07
        assert machine.registers.get_value(V2) == 0x01
        assert machine.program_counter == 0x204
        assert machine.is_paused

    def test_unbounded_recursion_overflows(self):
        machine = Machine(program(0x2202, 0x2200))
        run(machine, 16)
        assert machine.stack.depth == 16
        with pytest.raises(StackOverflowFault):
            machine.step()

    def test_return_without_call_underflows(self):
        machine = Machine(program(0x00EE))
        with pytest.raises(StackUnderflowFault):
            machine.step()

    def test_running_off_the_end_of_memory_faults(self):
        machine = Machine(program(0x1FFF))
        machine.step()
        assert machine.program_counter == 0xFFF
        with pytest.raises(MemoryAccessFault):
            machine.step()

    def test_cycle_count(self):
        machine = Machine(program(0x1202, 0x1200))
        run(machine, 5)
        assert machine.cycle_count == 5


class TestMachineKeys:
    def test_wait_for_key_blocks_until_pressed(self):
        machine = Machine(program(0xF10A, 0x1202))
        run(machine, 3)
        assert machine.program_counter == 0x200
        assert machine.is_paused

        machine.step([0x7, 0x4, 0x7])
        assert machine.registers.get_value(V1) == 0x4
        assert machine.program_counter == 0x202
        assert machine.is_paused is False

    def test_skip_if_key(self):
        machine = Machine(program(0x6105, 0xE19E, 0x6201, 0x6302))
        machine.step()
        machine.step({5})
        assert machine.program_counter == 0x206

    def test_invalid_key_code(self):
        machine = Machine(program(0x00E0))
        with pytest.raises(ValueError):
            machine.step([16])
        assert machine.cycle_count == 0


class TestMachineTimers:
    def test_timers_decay_every_eight_steps(self):
        # LD V1, 10 / LD DT, V1 / LD ST, V1 / JP 0x206 (自己ジャンプで停止)
        machine = Machine(program(0x610A, 0xF115, 0xF118, 0x1206))
        run(machine, 3)
        assert machine.timers.delay == 10
        assert machine.sound_active
        run(machine, 5)
        assert machine.timers.delay == 9
        assert machine.timers.sound == 9

    def test_timers_tick_while_paused(self):
        machine = Machine(program(0x6102, 0xF115, 0x1204))
        run(machine, 2 + 8 * 3)
        assert machine.is_paused
        assert machine.timers.delay == 0

    def test_read_delay_timer(self):
        machine = Machine(program(0x6109, 0xF115, 0xF207))
        run(machine, 3)
        assert machine.registers.get_value(V2) == 9


class TestMachineQuirks:
    def test_shift_reads_vy_without_quirks(self):
        machine = Machine(program(0x6180, 0x6205, 0x8126))
        run(machine, 3)
        assert machine.registers.get_value(V1) == 0x02
        assert machine.registers.get_value(VF) == 1

    def test_shift_reads_vx_with_quirks(self):
        machine = Machine(program(0x6180, 0x6205, 0x8126), quirks=Quirks.from_flag(True))
        run(machine, 3)
        assert machine.registers.get_value(V1) == 0x40
        assert machine.registers.get_value(VF) == 0

    def test_dump_index(self):
        code = program(0xA300, 0x6001, 0x6102, 0xF155)
        plain = Machine(code)
        run(plain, 4)
        assert plain.registers.index == 0x302
        assert plain.memory.read_bytes(0x300, 2) == bytes([1, 2])

        quirky = Machine(code, quirks=Quirks.active())
        run(quirky, 4)
        assert quirky.registers.index == 0x300


class TestMachineRandom:
    def test_injected_random_source(self):
        machine = Machine(program(0xC1F0, 0xC20F), rng=StubRandom(0xAB, 0xAB))
        run(machine, 2)
        assert machine.registers.get_value(V1) == 0xA0
        assert machine.registers.get_value(V2) == 0x0B


class TestMachineDraw:
    def test_draw_glyph_and_collision(self):
        # LD V0, 0x0A / LD F, V0 / DRW V1, V2, 5 / DRW V1, V2, 5
        machine = Machine(program(0x600A, 0xF029, 0xD125, 0xD125))
        run(machine, 3)
        assert machine.registers.index == 0x050 + 0xA * 5
        assert machine.framebuffer.get_pixel(0, 0)
        assert machine.registers.get_value(VF) == 0
        machine.step()
        assert machine.registers.get_value(VF) == 1
        assert not any(machine.framebuffer.pixels())

    def test_draw_output(self):
        machine = Machine(program(0x6000, 0xF029, 0xD011))
        run(machine, 3)
        rgba = machine.draw()
        assert len(rgba) == WIDTH * HEIGHT * 4
        assert rgba[0:4] == bytes(COLOR_ON)
        assert rgba[4 * 4:5 * 4] == bytes(COLOR_OFF)

    def test_draw_is_idempotent(self):
        machine = Machine(program(0xD015))
        machine.step()
        assert machine.draw() == machine.draw()


class TestMachineDiagnostics:
    def test_unimplemented_opcode_logs_warning(self, caplog):
        machine = Machine(program(0x00DE, 0x6101))
        with caplog.at_level(logging.WARNING):
            machine.step()
        assert "Unimplemented instruction detected: 0x00de" in caplog.text
        assert machine.program_counter == 0x202
        machine.step()
        assert machine.registers.get_value(V1) == 1

    def test_register_map(self):
        machine = Machine(program(0x61AB, 0xA123, 0x2300))
        run(machine, 3)
        regs = machine.get_register_map()
        assert regs["V1"] == 0xAB
        assert regs["VF"] == 0
        assert regs["I"] == 0x123
        assert regs["PC"] == 0x300
        assert regs["SP"] == 1
        assert regs["DT"] == 0
        assert regs["ST"] == 0
        assert len(regs) == 16 + 5

    def test_disassemble(self):
        machine = Machine(program(0x00E0, 0x612A, 0x1200))
        lines = machine.disassemble(0x200, 6)
        assert lines == [
            (0x200, "00E0", "CLS"),
            (0x202, "612A", "LD V1, 0x2A"),
            (0x204, "1200", "JP 0x200"),
        ]
