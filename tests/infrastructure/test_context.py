import unittest
from unittest import TestCase

import numpy as np

from edgegrad.domain._errors import ContextError
from edgegrad.infrastructure._context import Context


class TestContext(TestCase):
    def test_defaults_are_independent(self):
        a, b = Context(), Context()
        a.save_for_backward(np.zeros(1))
        a.saved_meta["k"] = 1
        self.assertEqual(b.saved_tensors, [])
        self.assertEqual(b.saved_meta, {})

    def test_save_and_read_tensors(self):
        ctx = Context(op="Dropout")
        m1, m2 = np.ones((2, 1)), np.zeros((2, 1))
        ctx.save_for_backward(m1, m2)
        first, second = ctx.saved(2)
        self.assertIs(first, m1)
        self.assertIs(second, m2)
        (only,) = ctx.saved(1)
        self.assertIs(only, m1)

    def test_saved_raises_when_missing(self):
        ctx = Context(op="Dropout")
        with self.assertRaises(ContextError) as cm:
            ctx.saved(1)
        self.assertEqual(cm.exception.op, "Dropout")
        self.assertEqual(cm.exception.key, "saved_tensors")

    def test_meta(self):
        ctx = Context(op="Concatenate")
        ctx.saved_meta["offsets"] = (0, 2)
        self.assertEqual(ctx.meta("offsets"), (0, 2))
        with self.assertRaises(ContextError) as cm:
            ctx.meta("argmax")
        self.assertEqual(cm.exception.key, "argmax")


if __name__ == "__main__":
    unittest.main()
