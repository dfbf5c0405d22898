import unittest
from unittest import TestCase

import numpy as np

from edgegrad.infrastructure.ops.elementwise_cpu import (
    exp_backward_cpu,
    exp_forward_cpu,
    log_backward_cpu,
    log_forward_cpu,
    relu_backward_cpu,
    relu_forward_cpu,
    sigmoid_backward_cpu,
    sigmoid_forward_cpu,
    tanh_backward_cpu,
    tanh_forward_cpu,
)


class TestElementwiseKernelsCPU(TestCase):
    def setUp(self):
        np.random.seed(0)
        self.x = np.random.randn(5, 3)
        self.g = np.random.randn(5, 3)

    def test_tanh(self):
        y = tanh_forward_cpu(self.x)
        np.testing.assert_allclose(y, np.tanh(self.x))
        np.testing.assert_allclose(
            tanh_backward_cpu(self.g, y, self.x), self.g * (1 - np.tanh(self.x) ** 2)
        )

    def test_sigmoid_matches_reference(self):
        y = sigmoid_forward_cpu(self.x)
        ref = 1.0 / (1.0 + np.exp(-self.x))
        np.testing.assert_allclose(y, ref, rtol=1e-12)
        np.testing.assert_allclose(
            sigmoid_backward_cpu(self.g, y, self.x), self.g * ref * (1 - ref), rtol=1e-12
        )

    def test_sigmoid_is_stable_for_large_magnitudes(self):
        x = np.array([[-1000.0], [0.0], [1000.0]])
        with np.errstate(over="raise"):
            y = sigmoid_forward_cpu(x)
        np.testing.assert_allclose(y, [[0.0], [0.5], [1.0]])

    def test_sigmoid_preserves_float32(self):
        y = sigmoid_forward_cpu(self.x.astype(np.float32))
        self.assertEqual(y.dtype, np.float32)

    def test_sigmoid_promotes_integers(self):
        y = sigmoid_forward_cpu(np.array([[0], [2]], dtype=np.int64))
        self.assertTrue(np.issubdtype(y.dtype, np.floating))
        self.assertAlmostEqual(float(y[0, 0]), 0.5)

    def test_relu(self):
        x = np.array([[-1.0], [0.0], [2.0]])
        y = relu_forward_cpu(x)
        np.testing.assert_array_equal(y, [[0.0], [0.0], [2.0]])
        g = np.array([[3.0], [4.0], [5.0]])
        np.testing.assert_array_equal(relu_backward_cpu(g, y, x), [[0.0], [0.0], [5.0]])

    def test_exp(self):
        y = exp_forward_cpu(self.x)
        np.testing.assert_allclose(y, np.exp(self.x))
        np.testing.assert_allclose(exp_backward_cpu(self.g, y, self.x), self.g * y)

    def test_log(self):
        x = np.abs(self.x) + 0.1
        y = log_forward_cpu(x)
        np.testing.assert_allclose(y, np.log(x))
        np.testing.assert_allclose(log_backward_cpu(self.g, y, x), self.g / x)

    def test_log_of_zero_is_negative_infinity_without_warning(self):
        with np.errstate(divide="raise"):
            y = log_forward_cpu(np.array([[0.0]]))
        self.assertEqual(y[0, 0], -np.inf)

    def test_kernels_do_not_modify_arguments(self):
        x = self.x.copy()
        g = self.g.copy()
        for fwd, bwd in [
            (tanh_forward_cpu, tanh_backward_cpu),
            (sigmoid_forward_cpu, sigmoid_backward_cpu),
            (relu_forward_cpu, relu_backward_cpu),
            (exp_forward_cpu, exp_backward_cpu),
        ]:
            y = fwd(x)
            bwd(g, y, x)
        np.testing.assert_array_equal(x, self.x)
        np.testing.assert_array_equal(g, self.g)


if __name__ == "__main__":
    unittest.main()
