import logging

import numpy as np

logger = logging.getLogger(__name__)


class gradient():
    '''
    Solve for the coordinate value at the location where the value gradient exceeds the prescribed threshold gradient.
    '''

    def __init__(self):
        pass

    def gradient_mld(coordinate, value, critical_gradient):
        """
        Computes the gradient mld of a single trimmed profile

        Parameters
        ----------
        coordinate: the vertical coordinate, strictly increasing
        value: the value whose gradient is checked
        critical_gradient: the critical gradient for the mld
                           (units as value/coordinate)

        Returns
        -------
        mld: The deeper coordinate of the first segment whose absolute gradient exceeds
             critical_gradient.  If no segment does, the deeper coordinate of the
             steepest segment.  None for fewer than two points.
        """
        coordinate = np.asarray(coordinate, dtype=float)
        value = np.asarray(value, dtype=float)
        if len(value) < 2:
            return None

        dv_dc = abs(grad(coordinate, value, smooth=False))

        exceeds = np.flatnonzero(dv_dc > critical_gradient)
        if len(exceeds) > 0:
            return float(coordinate[exceeds[0]+1])

        # If no points hit the critical gradient, return the depth of maximum gradient
        logger.debug("Critical gradient %g never exceeded, using maximum gradient", critical_gradient)
        return float(coordinate[np.argmax(dv_dc)+1])

    def max_gradient(coordinate, value, kind='extreme'):
        """
        Computes the coordinate of the maximum gradient of a single trimmed profile

        The gradient is the centred difference in the interior with one sided
        differences at the end points.  Ties go to the deepest point.

        Parameters
        ----------
        coordinate: the vertical coordinate, strictly increasing
        value: the value whose gradient is checked
        kind: 'max' (most positive), 'min' (most negative) or 'extreme' (largest magnitude)

        Returns
        -------
        mld: The coordinate of the selected gradient, None for fewer than two points.
        """
        coordinate = np.asarray(coordinate, dtype=float)
        value = np.asarray(value, dtype=float)
        if len(value) < 2:
            return None

        dv_dc = centred_grad(coordinate, value)
        if kind == 'max':
            target = dv_dc
        elif kind == 'min':
            target = -dv_dc
        elif kind == 'extreme':
            target = abs(dv_dc)
        else:
            raise ValueError("kind must be 'max', 'min' or 'extreme', got %r" % (kind,))

        i_c = np.flatnonzero(target == np.max(target))[-1]
        return float(coordinate[i_c])


class linearfit():
    '''
    Computes the mld from fitting a line to the mixed layer and to the steepest
    part of the ___cline and finding where the two lines intersect.

    Attributes after construction
    -----------------------------
    mld: The intersection coordinate, None when the lines do not intersect inside the profile
    ydiff: The change in value across the transition (used to classify profiles)
    mixed_line: (slope, intercept) of the mixed layer fit, None if not computed
    transition_line: (slope, intercept) of the ___cline fit, None if not computed
    '''

    def __init__(self, coordinate, value, error_tolerance=1.e-10):
        self.mld = None
        self.ydiff = 0.0
        self.mixed_line = None
        self.transition_line = None

        coordinate = np.asarray(coordinate, dtype=float)
        value = np.asarray(value, dtype=float)

        # Need at least one point of the 3 point smoothed gradient
        if len(value) < 4:
            logger.debug("Too few points (%d) for the fit method", len(value))
            return

        with np.errstate(divide='ignore', invalid='ignore'):
            self.compute(coordinate, value, error_tolerance)

    def compute(self, coordinate, value, error_tolerance):
        num_coord = len(value)

        # Compute error of linear fit of data from the top down
        error = np.zeros(num_coord)
        for i_c in range(1, num_coord):
            slope, intercept = linefit(coordinate[:i_c+1], value[:i_c+1])
            model = intercept+slope*coordinate[:i_c+1]
            error[i_c] = np.sum((value[:i_c+1]-model)**2)

        total = np.sum(error)
        if not total > 0:
            # A perfectly linear profile has no mixed layer break
            logger.debug("Profile is linear, no fit mld")
            return
        error = error/total

        # Deepest point where the mixed layer fit is still within tolerance
        within = np.flatnonzero(error < error_tolerance)
        npt = within[-1] + 1 if len(within) > 0 else 1
        self.mixed_line = linefit(coordinate[:npt], value[:npt])

        # Find the ___cline model from the steepest 3 point smoothed gradient
        dv_dc = grad(coordinate, value, smooth=True)
        imax = int(np.argmax(abs(dv_dc)))
        self.transition_line = linefit(coordinate[imax:imax+3], value[imax:imax+3])

        ml_slope, ml_intercept = self.mixed_line
        cl_slope, cl_intercept = self.transition_line

        if cl_slope == ml_slope:
            logger.debug("Mixed layer and ___cline fits are parallel")
        else:
            mld = (ml_intercept-cl_intercept)/(cl_slope-ml_slope)
            if np.isfinite(mld) and (coordinate[0] <= mld <= coordinate[-1]):
                self.mld = max(float(mld), 0.0)
            else:
                logger.debug("Fit intersection %g outside of the profile", mld)

        # Change in value across the transition
        if self.mld is None:
            self.ydiff = 0.0
            return
        imixed = np.flatnonzero(coordinate <= self.mld)[-1]
        if imixed < num_coord-3:
            self.ydiff = float(value[imixed] - value[imixed+2])
        else:
            self.ydiff = float(value[imax] - value[imax+2])


def grad(coordinate, value, smooth):
    """Forward difference gradient, optionally with the 3 point smoothing of the Holte and Talley .m code"""
    one_thrd = 1./3.
    dv_dc = (value[1:]-value[:-1])/(coordinate[1:]-coordinate[:-1])

    if smooth:
        return one_thrd*(dv_dc[0:-2]+dv_dc[1:-1]+dv_dc[2:])
    else:
        return dv_dc


def centred_grad(coordinate, value):
    """Centred difference gradient w/ special treatment of edges"""
    dv_dc = (value[1:]-value[:-1])/(coordinate[1:]-coordinate[:-1])
    return np.concatenate([dv_dc[:1], 0.5*(dv_dc[1:]+dv_dc[:-1]), dv_dc[-1:]])


def linefit(coordinate, value):
    """Least squares slope and intercept of value against coordinate"""

    val_mean = np.mean(value)
    coor_mean = np.mean(coordinate)
    coor_var = np.mean((coordinate-coor_mean)**2)

    if coor_var == 0:
        return 0.0, float(val_mean)

    covariance = np.mean((coordinate-coor_mean)*(value-val_mean))
    slope = covariance/coor_var
    intercept = val_mean - coor_mean*slope

    return float(slope), float(intercept)
