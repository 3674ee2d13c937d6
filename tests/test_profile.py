"""Tests for profile trimming and the idealized columns."""

import gsw
import numpy as np
import pytest

from hybridmixedlayer import hybridmixedlayer as hml
from hybridmixedlayer.profile import profile, potential_density
from hybridmixedlayer.column import column


def test_sorts_and_trims_above_reference():
    prof = profile([30., 5., 10., 20.], [7., 9., 9., 8.], refpres=10.)
    np.testing.assert_array_equal(prof.pressure, [10., 20., 30.])
    np.testing.assert_array_equal(prof.temperature, [9., 8., 7.])
    assert prof.valid
    assert prof.variables == ('temperature',)


def test_drops_non_finite_samples():
    prof = profile([10., 20., 30., 40.], [9., np.nan, 8., 7.],
                   salinity=[35., 35., np.inf, 35.1], density=[25., 25., 25.1, 25.2])
    np.testing.assert_array_equal(prof.pressure, [10., 40.])
    np.testing.assert_array_equal(prof.salinity, [35., 35.1])
    np.testing.assert_array_equal(prof.density, [25., 25.2])


def test_repeated_pressure_keeps_first():
    prof = profile([10., 20., 20., 30.], [9., 8., 100., 7.])
    np.testing.assert_array_equal(prof.pressure, [10., 20., 30.])
    np.testing.assert_array_equal(prof.temperature, [9., 8., 7.])


def test_density_from_salinity():
    T = np.array([15., 12., 8.])
    S = np.array([35., 35.1, 35.2])
    prof = profile([10., 20., 30.], T, salinity=S)
    np.testing.assert_allclose(prof.density, gsw.rho(S, T, 0.)-1000.)
    np.testing.assert_allclose(potential_density(S, T), prof.density)
    assert prof.variables == ('temperature', 'salinity', 'density')


def test_custom_equation_of_state():
    prof = profile([10., 20.], [15., 14.], salinity=[35., 35.],
                   eos=lambda S, T: 0.2*(20.-T))
    np.testing.assert_allclose(prof.density, [1., 1.2])


def test_interface_equation_of_state():
    prof = hml.profile([5., 10., 20.], [16., 15., 14.], salinity=[35., 35., 35.],
                       eos=lambda S, T: 0.2*(20.-T))
    np.testing.assert_allclose(prof.pressure, [10., 20.])
    np.testing.assert_allclose(prof.density, [1., 1.2])
    np.testing.assert_allclose(hml.profile([10., 20.], [15., 14.], salinity=[35., 35.]).density,
                               potential_density(np.array([35., 35.]), np.array([15., 14.])))


def test_supplied_density_is_not_recomputed():
    prof = profile([10., 20.], [15., 14.], salinity=[35., 35.], density=[26., 26.5],
                   eos=lambda S, T: pytest.fail("equation of state should not be called"))
    np.testing.assert_array_equal(prof.density, [26., 26.5])


def test_insufficient_data():
    prof = profile([0., 5., 10., 20.], [20., 20., np.nan, np.nan], refpres=10.)
    assert not prof.valid
    assert len(prof) == 0


def test_single_sample_is_insufficient():
    assert not profile([10., 20.], [15., np.nan]).valid


def test_mismatched_lengths():
    with pytest.raises(ValueError):
        profile([10., 20., 30.], [15., 14.])
    with pytest.raises(ValueError):
        profile([10., 20.], [15., 14.], salinity=[35.])


class TestColumn:

    def test_two_layer(self, summer_column):
        col = summer_column
        assert col.mixed_p == 100.
        assert np.all(col.T[col.p <= 100.] == 20.)
        assert col.T[-1] < col.T[0]
        assert np.all(np.diff(col.prho) >= 0.)

    def test_linear_eos(self):
        col = column(idealized_type='linear', T0=10., dTdp=0.01, EOS='Linear', nz=5)
        np.testing.assert_allclose(col.prho, 25.+(col.S-35.)*0.8-(col.T-10.)*0.2)

    def test_unknown_type(self):
        with pytest.raises(ValueError):
            column(idealized_type='three-layer')

    def test_single_metrics(self, summer_column):
        assert summer_column.threshold(var='T', delta=0.2) == 110.
        assert summer_column.gradient(var='T', critical_gradient=0.005) == 110.
        assert summer_column.linearfit(var='T') == pytest.approx(100., abs=1.e-6)
