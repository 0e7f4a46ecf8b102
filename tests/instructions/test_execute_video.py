import unittest

from chip8_tracer.core.registers import Register
from chip8_tracer.core.state import Chip8System, StepContext
from chip8_tracer.instructions import decode_word, execute_instruction
from chip8_tracer.transport.memory import Memory

V1 = Register(1)
V2 = Register(2)
VF = Register(0xF)

class TestVideoInstructions(unittest.TestCase):
    def setUp(self):
        self.system = Chip8System(memory=Memory())
        self.regs = self.system.registers
        self.fb = self.system.framebuffer

    def _execute(self, word):
        ctx = StepContext(pc=0x200)
        execute_instruction(decode_word(word), self.system, ctx)
        return ctx

    def test_draw_glyph(self):
        # "0" のグリフ (F0 90 90 90 F0) を (2, 3) に描画
        self.regs.index = 0x050
        self.regs.set_value(V1, 2)
        self.regs.set_value(V2, 3)
        self._execute(0xD125)
        self.assertTrue(self.fb.get_pixel(2, 3))
        self.assertTrue(self.fb.get_pixel(5, 3))
        self.assertFalse(self.fb.get_pixel(3, 4))
        self.assertTrue(self.fb.get_pixel(5, 7))
        self.assertEqual(self.regs.get_value(VF), 0)

    def test_redraw_sets_collision_flag(self):
        self.regs.index = 0x050
        self._execute(0xD125)
        self._execute(0xD125)
        self.assertEqual(self.regs.get_value(VF), 1)
        self.assertFalse(any(self.fb.pixels()))

    def test_flag_cleared_when_no_collision(self):
        self.regs.set_value(VF, 1)
        self.regs.index = 0x050
        self._execute(0xD125)
        self.assertEqual(self.regs.get_value(VF), 0)

    def test_clear_screen(self):
        self.regs.index = 0x050
        self._execute(0xD125)
        self._execute(0x00E0)
        self.assertFalse(any(self.fb.pixels()))

if __name__ == '__main__':
    unittest.main()
