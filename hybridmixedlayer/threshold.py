import logging

import numpy as np

logger = logging.getLogger(__name__)


class threshold():
    '''
    Solve for the coordinate value at the location where the value departs from its
    value at the top of the profile by more than the prescribed delta.
    '''

    def __init__(self):
        pass

    def threshold_mld(coordinate, value, delta=0.0, interp=False):
        """
        Computes the threshold mld of a single trimmed profile

        Parameters
        ----------
        coordinate: the vertical coordinate, strictly increasing
                    (e.g., pressure)
        value: the value being checked for the threshold mld
               (e.g., temperature, density, etc.)
        delta: the absolute departure from the reference value that marks the mld
               (same units as value)
        interp: linearly interpolate to the exact crossing of the threshold

        Returns
        -------
        mld: The first coordinate where the departure exceeds delta,
             None if it is never exceeded
        """

        coordinate = np.asarray(coordinate, dtype=float)
        value = np.asarray(value, dtype=float)
        if coordinate.shape != value.shape:
            raise ValueError("The vertical coordinate must be the same shape as the value array")

        if len(value) < 2:
            return None

        # The shallowest retained sample is the reference
        value_ref = value[0]

        exceeds = np.flatnonzero(abs(value - value_ref) > delta)
        if len(exceeds) == 0:
            logger.debug("Threshold %g never exceeded", delta)
            return None

        i_c = exceeds[0]
        if not interp:
            return float(coordinate[i_c])

        crd_up = coordinate[i_c-1]
        crd_dn = coordinate[i_c]
        val_up = value[i_c-1]
        val_dn = value[i_c]
        # The crossing is on whichever side of the reference the profile left through
        value_threshold = value_ref + np.sign(val_dn - value_ref)*delta
        dz_dv = (crd_dn-crd_up)/(val_dn-val_up)
        return float(crd_up + (value_threshold-val_up)*dz_dv)
