import logging

from .gradient import gradient as gradient
from .extrema import extrema as extrema

logger = logging.getLogger(__name__)


class subsurface():
    '''
    Sometimes subsurface temperature or salinity intrusions exist at the base
    of the mixed layer.  For temperature, these intrusions are characterized
    by subsurface temperature maxima located near temperature gradient maxima
    (salinity minima near salinity gradient minima).
    '''

    def __init__(self):
        pass

    def subsurface_mld(coordinate, value, kind='max', deltad=100.):
        """
        Computes the subsurface anomaly mld of a single trimmed profile

        Parameters
        ----------
        coordinate: the vertical coordinate
        value: the profile values
        kind: 'max' for temperature maxima, 'min' for salinity minima
        deltad: the maximum separation of the extremum and the gradient extremum
                (units of coordinate)

        Returns
        -------
        mld: The shallower of the two if they are separated by less than deltad, else None
        """
        cval = extrema.extrema_mld(coordinate, value, kind)
        cslp = gradient.max_gradient(coordinate, value, kind)
        if cval is None or cslp is None:
            return None

        if abs(cslp-cval) < deltad:
            return min(cslp, cval)

        logger.debug("Gradient %s at %g is %g from the extremum, no subsurface anomaly",
                     kind, cslp, abs(cslp-cval))
        return None
