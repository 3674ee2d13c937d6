import logging

import numpy as np
import gsw as gsw

logger = logging.getLogger(__name__)


def potential_density(salinity, temperature):
    """
    Potential density anomaly referenced to the surface (kg/m3 - 1000)

    Parameters
    ----------
    salinity: Absolute salinity (g/kg)
    temperature: Conservative temperature (deg C)
    """
    return gsw.density.rho(salinity, temperature, 0.) - 1000.


class profile():
    '''
    A single cast trimmed to the samples usable by the mld metrics.

    The retained samples are sorted by pressure, finite in every supplied
    variable and no shallower than the reference pressure. If fewer than two
    samples survive the profile is flagged as invalid rather than raising.
    '''

    def __init__(self, pressure, temperature, salinity=None, density=None,
                 refpres=10., eos=potential_density):

        pres = np.asarray(pressure, dtype=float).ravel()
        temp = np.asarray(temperature, dtype=float).ravel()
        if temp.shape != pres.shape:
            raise ValueError("temperature must be the same size as pressure")

        columns = [pres, temp]
        sal = None
        if salinity is not None:
            sal = np.asarray(salinity, dtype=float).ravel()
            if sal.shape != pres.shape:
                raise ValueError("salinity must be the same size as pressure")
            columns.append(sal)
        rho = None
        if density is not None:
            rho = np.asarray(density, dtype=float).ravel()
            if rho.shape != pres.shape:
                raise ValueError("density must be the same size as pressure")
            columns.append(rho)

        self.refpres = refpres

        keep = np.ones(pres.shape, dtype=bool)
        for col in columns:
            keep &= np.isfinite(col)
        with np.errstate(invalid='ignore'):
            keep &= pres >= refpres

        order = np.argsort(pres[keep], kind='stable')
        self.pressure = pres[keep][order]
        self.temperature = temp[keep][order]
        self.salinity = None if sal is None else sal[keep][order]
        self.density = None if rho is None else rho[keep][order]

        # Strictly increasing, first occurrence of a repeated pressure wins
        if len(self.pressure) > 1:
            unique = np.concatenate([[True], np.diff(self.pressure) > 0])
            if not np.all(unique):
                logger.debug("Dropping %d repeated pressure(s)", np.sum(~unique))
                self._select(unique)

        if (self.density is None) and (self.salinity is not None):
            self.density = eos(self.salinity, self.temperature)

        dropped = np.size(pres) - len(self.pressure)
        if dropped > 0:
            logger.debug("Dropped %d of %d samples (non-finite, repeated or above %g)",
                         dropped, np.size(pres), refpres)

        self.valid = len(self.pressure) >= 2
        if not self.valid:
            logger.debug("Insufficient data: %d usable sample(s) below %g",
                         len(self.pressure), refpres)

    def _select(self, LI):
        self.pressure = self.pressure[LI]
        self.temperature = self.temperature[LI]
        if self.salinity is not None:
            self.salinity = self.salinity[LI]
        if self.density is not None:
            self.density = self.density[LI]

    def __len__(self):
        return len(self.pressure)

    def variable(self, name):
        """Returns the values of 'temperature', 'salinity' or 'density' (None if absent)"""
        return getattr(self, name)

    @property
    def variables(self):
        """Names of the variables carried by this profile"""
        return tuple(v for v in ('temperature', 'salinity', 'density')
                     if self.variable(v) is not None)
