# vim: set expandtab shiftwidth=4 softtabstop=4:

# === UCSF ChimeraX Copyright ===
# Copyright 2022 Regents of the University of California. All rights reserved.
# This software is provided pursuant to the ChimeraX license agreement, which
# covers academic and commercial uses. For more information, see
# <http://www.rbvi.ucsf.edu/chimerax/docs/licensing.html>
#
# This file is part of the ChimeraX library. You can also redistribute and/or
# modify it under the GNU Lesser General Public License version 2.1 as
# published by the Free Software Foundation. For more details, see
# <https://www.gnu.org/licenses/old-licenses/lgpl-2.1.html>
#
# This file is distributed WITHOUT ANY WARRANTY; without even the implied
# warranty of MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. This notice
# must be embedded in or attached to all copies, including partial copies, of
# the software or any revisions or derivations thereof.
# === UCSF ChimeraX Copyright ===

'''
camera: Viewpoint of the structure view
=======================================

The camera looks along its -z axis at a center point.  Scene points are
rotated about the center, shifted by the pan offset and pushed back by the
camera distance before the perspective projection.
'''

from numpy import array, identity, dot, float64, zeros


class Camera:

    def __init__(self):
        self.field_of_view = 45			# degrees, width
        self.rotation = identity(3, float64)	# scene to camera axes
        self.center = zeros((3,), float64)
        self.pan = zeros((2,), float64)		# scene units in camera x,y
        self.distance = 10.0
        self.redraw_needed = True

    def reset(self, center, size):
        '''
        Look along the scene -z axis at center, far enough that a sphere of
        diameter size fills the field of view.
        '''
        from math import pi, tan
        if size <= 0:
            size = 1.0
        fov = self.field_of_view*pi/180
        self.rotation = identity(3, float64)
        self.center = array(center, float64)
        self.pan = zeros((2,), float64)
        self.distance = 0.5*size + 0.5*size/tan(0.5*fov)
        self.redraw_needed = True

    def rotate(self, dx, dy):
        '''Rotate for a mouse drag of (dx,dy) pixels, y downward.'''
        from math import sqrt
        angle = 0.5*sqrt(dx*dx+dy*dy)
        if angle == 0:
            return
        r = rotation_matrix((dy,dx,0), angle)
        self.rotation = dot(r, self.rotation)
        self.redraw_needed = True

    def translate(self, dx, dy, width=None):
        '''Pan for a mouse drag of (dx,dy) pixels, y downward.'''
        psize = self.pixel_size(width or 500)
        self.pan += (psize*dx, -psize*dy)
        self.redraw_needed = True

    def zoom(self, steps):
        '''Steps are mouse wheel clicks, positive zooms in.'''
        if steps > 0:
            f = 0.9**steps
        elif steps < 0:
            f = 1.1**(-steps)
        else:
            return
        self.distance *= f
        self.redraw_needed = True

    def camera_coordinates(self, xyz):
        p = dot(array(xyz, float64) - self.center, self.rotation.T)
        p[...,0] += self.pan[0]
        p[...,1] += self.pan[1]
        p[...,2] -= self.distance
        return p

    def project(self, xyz, width, height):
        '''
        Return window pixel positions (N by 2, y downward) and depths
        (distance in front of the camera) of scene points xyz (N by 3).
        Points behind the camera get a depth <= 0.
        '''
        from math import pi, tan
        from numpy import where
        p = self.camera_coordinates(xyz)
        depth = -p[...,2]
        z = where(depth > 1e-6, depth, 1e-6)
        f = 0.5*width/tan(0.5*self.field_of_view*pi/180)
        xy = zeros(p.shape[:-1] + (2,), float64)
        xy[...,0] = 0.5*width + f*p[...,0]/z
        xy[...,1] = 0.5*height - f*p[...,1]/z
        return xy, depth

    def pixel_size(self, width):
        '''Size of a pixel in scene units at the center of rotation.'''
        from math import pi, tan
        fov = self.field_of_view*pi/180
        return self.distance * 2*tan(0.5*fov) / width


def rotation_matrix(axis, angle):
    '''Rotation by angle (degrees) about axis, as a 3 by 3 matrix.'''
    from math import pi, sin, cos, sqrt
    x, y, z = axis
    n = sqrt(x*x+y*y+z*z)
    if n == 0:
        return identity(3, float64)
    x, y, z = x/n, y/n, z/n
    a = angle*pi/180
    c, s = cos(a), sin(a)
    t = 1 - c
    return array(((t*x*x+c, t*x*y-s*z, t*x*z+s*y),
                  (t*x*y+s*z, t*y*y+c, t*y*z-s*x),
                  (t*x*z-s*y, t*y*z+s*x, t*z*z+c)), float64)
