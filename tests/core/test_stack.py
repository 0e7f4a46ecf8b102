import unittest

from chip8_tracer.common.errors import MachineFault, StackOverflowFault, StackUnderflowFault
from chip8_tracer.core.stack import MAX_DEPTH, CallStack

class TestCallStack(unittest.TestCase):
    def setUp(self):
        self.stack = CallStack()

    def test_push_pop_lifo(self):
        self.stack.push(0x200)
        self.stack.push(0x300)
        self.assertEqual(self.stack.depth, 2)
        self.assertEqual(self.stack.frames(), [0x200, 0x300])
        self.assertEqual(self.stack.pop(), 0x300)
        self.assertEqual(self.stack.pop(), 0x200)
        self.assertEqual(len(self.stack), 0)

    def test_capacity_is_sixteen(self):
        for i in range(MAX_DEPTH):
            self.stack.push(0x200 + i * 2)
        self.assertEqual(self.stack.depth, 16)
        with self.assertRaises(StackOverflowFault):
            self.stack.push(0x400)
        # 失敗したプッシュは状態を変えない
        self.assertEqual(self.stack.depth, 16)

    def test_pop_empty(self):
        with self.assertRaises(StackUnderflowFault):
            self.stack.pop()

    def test_faults_share_base(self):
        with self.assertRaises(MachineFault):
            self.stack.pop()

    def test_frames_is_copy(self):
        self.stack.push(0x222)
        frames = self.stack.frames()
        frames.append(0x999)
        self.assertEqual(self.stack.depth, 1)

if __name__ == '__main__':
    unittest.main()
