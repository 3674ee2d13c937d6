"""Shared test fixtures: idealized casts with known mixed layer depths."""

import numpy as np
import pytest

from hybridmixedlayer.column import column


@pytest.fixture
def knee_cast():
    """15 degC down to 200 dbar, then linear to 5 degC at 500 dbar (10 dbar spacing)."""
    p = np.arange(10., 501., 10.)
    T = np.where(p <= 200., 15., 15.-(p-200.)*10./300.)
    return p, T


@pytest.fixture
def step_cast():
    """Uniform 15 degC above 150 dbar and 10 degC from 150 dbar down."""
    p = np.arange(10., 301., 10.)
    T = np.where(p < 150., 15., 10.)
    return p, T


@pytest.fixture
def summer_column():
    """Strong thermocline under a 100 dbar mixed layer, uniform salinity."""
    return column(idealized_type='two-layer', T0=20., dTdp=0.05, S0=35., dSdp=0.,
                  mixedfrac=0.2, Dpt=500., Ptop=10., nz=50)


@pytest.fixture
def winter_cast():
    """Weakly stratified in both temperature and salinity below 200 dbar."""
    p = np.arange(10., 501., 10.)
    T = np.where(p <= 200., 10., 10.-0.001*(p-200.))
    S = np.where(p <= 200., 35., 35.+0.0005*(p-200.))
    return p, T, S


@pytest.fixture
def inversion_cast():
    """Temperature rises 2.5 degC between 100 and 150 dbar, then cools slowly."""
    p = np.arange(10., 401., 10.)
    k = (p-100.)/10.
    T = np.where(p <= 100., 10.,
                 np.where(p <= 150., 10.+0.5*k, 12.5-0.25*(k-5.)))
    return p, T
