"""Python implementation of the Lumen sphere raytracer.

This package renders scenes of analytic primitives lit by point lights using
single-bounce primary-ray shading, with the per-pixel pass parallelised by
Taichi. It supports:
- Vector and unit-quaternion algebra for scene placement
- Camera ray generation from screen-plane coordinates
- Analytic ray-sphere intersection with ordered hit records
- Local (diffuse + specular) shading and distance visualisation

Subpackages:
    core: Vectors, quaternions, rays, colours and shared error types
    camera: Camera model mapping screen coordinates to world rays
    geometry: Intersectable abstraction and sphere primitive
    materials: Surface reflectance parameters and GPU material registry
    scene: Scene container, point lights and GPU scene storage
    render: Shading strategies, image buffer and renderer
    preview: Image export utilities
"""

__version__ = "0.1.0"
