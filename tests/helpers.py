"""Scripted random source so engine tests can pin every draw."""

from pleasures.core.rng import RandomSource


class ScriptedRandom(RandomSource):
    def __init__(self, bernoulli=False, gaussians=(), uniforms=()):
        super().__init__()
        self.bern = bernoulli
        self.gaussians = list(gaussians)
        self.uniforms = list(uniforms)
        self.uniform_calls = []

    def bernoulli(self, p):
        return self.bern

    def gaussian(self, mean, stddev):
        return self.gaussians.pop(0)

    def uniform(self, low, high):
        self.uniform_calls.append((low, high))
        if self.uniforms:
            return self.uniforms.pop(0)
        return low


def zero_noise(x, z, t):
    return 0.0 * x
