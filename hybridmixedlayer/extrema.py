import numpy as np


class extrema():
    '''
    Solve for the coordinate value at the location where the value is equal to some extrema
    (e.g., min/max).
    '''

    def __init__(self):
        pass

    def extrema_mld(coordinate, value, kind='max'):
        """
        Computes the extrema mld of a single trimmed profile

        Parameters
        ----------
        coordinate: the vertical coordinate
        value: the profile values
        kind: 'max' for the maximum (temperature) or 'min' for the minimum (salinity, density)

        Returns
        -------
        mld: The coordinate of the extreme value, deepest one if it occurs more than once.
             None for an empty profile.
        """
        coordinate = np.asarray(coordinate, dtype=float)
        value = np.asarray(value, dtype=float)
        if len(value) == 0:
            return None

        if kind == 'max':
            extreme = np.max(value)
        elif kind == 'min':
            extreme = np.min(value)
        else:
            raise ValueError("kind must be 'max' or 'min', got %r" % (kind,))

        #keep searching in case a deeper point is found
        i_c = np.flatnonzero(value == extreme)[-1]
        return float(coordinate[i_c])
