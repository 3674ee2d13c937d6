"""Tests for the single candidate metrics."""

import numpy as np
import pytest

from hybridmixedlayer import hybridmixedlayer as hml
from hybridmixedlayer.threshold import threshold
from hybridmixedlayer.gradient import gradient, linearfit, centred_grad, linefit
from hybridmixedlayer.extrema import extrema
from hybridmixedlayer.subsurface import subsurface


class TestThreshold:

    def test_knee_profile(self, knee_cast):
        p, T = knee_cast
        assert threshold.threshold_mld(p, T, 0.2) == 210.

    def test_step_change(self, step_cast):
        p, T = step_cast
        assert abs(threshold.threshold_mld(p, T, 0.2) - 150.) <= 10.

    def test_never_exceeded(self, knee_cast):
        p, T = knee_cast
        assert threshold.threshold_mld(p, T, 50.) is None

    def test_interpolated_crossing(self, knee_cast):
        p, T = knee_cast
        assert threshold.threshold_mld(p, T, 0.2, interp=True) == pytest.approx(206.)

    def test_increasing_value(self):
        p = np.arange(10., 101., 10.)
        rho = np.where(p < 50., 25., 25.5)
        assert threshold.threshold_mld(p, rho, 0.03) == 50.

    def test_monotone_in_delta(self, knee_cast):
        p, T = knee_cast
        depths = [threshold.threshold_mld(p, T, d) for d in (0.05, 0.1, 0.2, 0.5, 1., 2., 5., 20.)]
        depths = [np.inf if d is None else d for d in depths]
        assert all(a <= b for a, b in zip(depths[:-1], depths[1:]))

    def test_single_sample(self):
        assert threshold.threshold_mld([10.], [15.], 0.2) is None


class TestGradient:

    def test_knee_profile(self, knee_cast):
        p, T = knee_cast
        assert gradient.gradient_mld(p, T, 0.005) == 210.

    def test_step_change(self, step_cast):
        p, T = step_cast
        assert abs(gradient.gradient_mld(p, T, 0.005) - 150.) <= 10.

    def test_falls_back_to_maximum_gradient(self):
        p = np.array([10., 20., 30., 40., 50.])
        T = np.array([10., 9.99, 9.97, 9.96, 9.95])
        # Steepest segment is 20-30 dbar
        assert gradient.gradient_mld(p, T, 1.) == 30.

    def test_irregular_spacing(self):
        p = np.array([10., 12., 40., 41.])
        T = np.array([10., 10., 9.9, 9.])
        assert gradient.gradient_mld(p, T, 0.5) == 41.

    def test_max_gradient_kinds(self):
        p = np.array([10., 20., 30., 40., 50., 60.])
        S = np.array([35., 35., 34.5, 34.5, 35.5, 35.5])
        assert gradient.max_gradient(p, S, 'extreme') == 50.
        assert gradient.max_gradient(p, S, 'min') == 30.
        assert gradient.max_gradient(p, S, 'max') == 50.

    def test_max_gradient_bad_kind(self):
        with pytest.raises(ValueError):
            gradient.max_gradient([10., 20.], [1., 2.], 'steepest')

    def test_centred_gradient_edges(self):
        p = np.array([0., 1., 3.])
        v = np.array([0., 1., 5.])
        np.testing.assert_allclose(centred_grad(p, v), [1., 1.5, 2.])

    def test_too_short(self):
        assert gradient.gradient_mld([10.], [1.], 0.005) is None
        assert gradient.max_gradient([10.], [1.], 'extreme') is None


class TestLinearFit:

    def test_knee_profile(self, knee_cast):
        p, T = knee_cast
        fit = linearfit(p, T, 1.e-10)
        assert fit.mld == pytest.approx(200., abs=1.e-6)
        assert fit.mixed_line[0] == 0.0
        assert fit.mixed_line[1] == 15.
        assert fit.transition_line[0] == pytest.approx(-1./30.)

    def test_idempotent(self, summer_column):
        first = linearfit(summer_column.p, summer_column.prho, 1.e-10)
        second = linearfit(summer_column.p, summer_column.prho, 1.e-10)
        assert first.mld == second.mld
        assert first.ydiff == second.ydiff

    def test_summer_ydiff(self, summer_column):
        fit = linearfit(summer_column.p, summer_column.T, 1.e-10)
        assert fit.mld == pytest.approx(100., abs=1.e-6)
        assert fit.ydiff >= 0.5

    def test_uniform_profile(self):
        p = np.arange(10., 201., 10.)
        fit = linearfit(p, np.full(p.shape, 35.))
        assert fit.mld is None
        assert fit.ydiff == 0.0

    def test_too_short(self):
        assert linearfit([10., 20., 30.], [1., 1., 0.]).mld is None

    def test_no_subset_within_tolerance(self, knee_cast):
        # Falls back to the surface value for the mixed layer line
        p, T = knee_cast
        fit = linearfit(p, T, 0.)
        assert fit.mixed_line == (0.0, 15.)
        assert fit.mld == pytest.approx(200., abs=1.e-6)

    def test_interface(self, knee_cast):
        p, T = knee_cast
        assert hml.linearfit(p, T) == pytest.approx(200., abs=1.e-6)

    def test_linefit(self):
        slope, intercept = linefit(np.array([0., 1., 2.]), np.array([1., 3., 5.]))
        assert slope == pytest.approx(2.)
        assert intercept == pytest.approx(1.)


class TestExtrema:

    def test_temperature_maximum(self, inversion_cast):
        p, T = inversion_cast
        assert extrema.extrema_mld(p, T, 'max') == 150.

    def test_minimum_deepest_tie(self):
        p = np.array([10., 20., 30., 40.])
        S = np.array([34., 34., 34., 35.])
        assert extrema.extrema_mld(p, S, 'min') == 30.

    def test_affine_invariance(self, inversion_cast):
        p, T = inversion_cast
        assert extrema.extrema_mld(p, 3.*T+7., 'max') == extrema.extrema_mld(p, T, 'max')
        assert extrema.extrema_mld(p, -2.*T+1., 'min') == extrema.extrema_mld(p, T, 'max')

    def test_bad_kind(self):
        with pytest.raises(ValueError):
            extrema.extrema_mld([10.], [1.], 'mean')


class TestSubsurface:

    def test_inversion(self, inversion_cast):
        p, T = inversion_cast
        assert subsurface.subsurface_mld(p, T, 'max', 100.) == 140.

    def test_separated_beyond_limit(self, inversion_cast):
        p, T = inversion_cast
        assert subsurface.subsurface_mld(p, T, 'max', 5.) is None

    def test_interface(self, inversion_cast):
        p, T = inversion_cast
        assert hml.subsurface(p, T) == 140.
        assert hml.extrema(p, T) == 150.


def test_interface_threshold_and_gradient(knee_cast):
    p, T = knee_cast
    assert hml.threshold(p, T, delta=0.2) == 210.
    assert hml.gradient(p, T, critical_gradient=0.005) == 210.
    assert hml.gradient(p, T, critical_gradient=None) is not None
