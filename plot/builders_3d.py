# =========================
# 3D Builders (calculus charts)
# =========================
from __future__ import annotations
from typing import Dict, List
import numpy as np
import plotly.graph_objects as go

from plot.chart_spec import ChartDescriptor
from plot.numeric import box_mesh, linspace, meshgrid

VIRIDIS8 = ["#440154", "#3b528b", "#21918c", "#5ec962", "#fde725", "#31688e", "#35b779", "#90d743"]

PI = np.pi


def _xyz_scene(zaxis: str = "Z", **extra) -> Dict:
    scene = dict(xaxis=dict(title="X"), yaxis=dict(title="Y"), zaxis=dict(title=zaxis))
    scene.update(extra)
    return scene


def _solid(color: str) -> List[List]:
    return [[0, color], [1, color]]


def _panel_title(x: float, y: float, text: str, size: int) -> Dict:
    return dict(x=x, y=y, xref="paper", yref="paper", text=text, showarrow=False, font=dict(size=size))


def build_riemann_sum() -> ChartDescriptor:
    n = 8
    x_fine = linspace(0, PI, 300)
    y_fine = np.sin(x_fine) + 1.5
    dx = PI / n

    bars = []
    for i in range(n):
        hi = float(np.sin((i + 0.5) * dx) + 1.5)  # midpoint rule
        bars.append(box_mesh(i * dx, (i + 0.92) * dx, 0, 0.3, 0, hi, VIRIDIS8[i]))

    curve = go.Scatter3d(
        x=x_fine,
        y=np.zeros(300),
        z=y_fine,
        mode="lines",
        line=dict(color="red", width=4),
        name="f(x) = sin(x) + 1.5",
    )

    return ChartDescriptor(
        data=(*bars, curve),
        layout=dict(
            title="Riemann Sum (n=8 rectangles)<br>Area ≈ Σ f(xᵢ*)·Δx  →  ∫f(x)dx  as n→∞",
            scene=dict(
                xaxis=dict(title="X"),
                yaxis=dict(title="Depth", showticklabels=False),
                zaxis=dict(title="f(x)"),
            ),
        ),
    )


def build_surface_revolution() -> ChartDescriptor:
    n_x, n_t = 80, 80
    x_vals = linspace(0, PI, n_x)
    r_vals = np.sin(x_vals) + 1.5
    theta = linspace(0, 2 * PI, n_t)

    # Parametric surface X=x, Y=r·cos θ, Z=r·sin θ, every grid (n_t, n_x)
    R, T = meshgrid(r_vals, theta)
    Xs, _ = meshgrid(x_vals, theta)
    Ys = R * np.cos(T)
    Zs = R * np.sin(T)

    return ChartDescriptor(
        data=(
            go.Surface(x=Xs, y=Ys, z=Zs, colorscale="YlOrBr", opacity=0.85, showscale=False, name="Surface of Revolution"),
            go.Scatter3d(
                x=x_vals,
                y=r_vals,
                z=np.zeros(n_x),
                mode="lines",
                line=dict(color="red", width=4),
                name="y = sin(x) + 1.5",
            ),
        ),
        layout=dict(
            title="Surface of Revolution<br>S = 2π ∫ f(x) √(1+[f'(x)]²) dx",
            scene=_xyz_scene(),
        ),
    )


def build_3d_coordinates() -> ChartDescriptor:
    px, py, pz = 3, 4, 5
    dashed = dict(color="black", width=2, dash="dash")

    def drop_line(xs, ys, zs) -> go.Scatter3d:
        return go.Scatter3d(x=xs, y=ys, z=zs, mode="lines", line=dashed, showlegend=False)

    return ChartDescriptor(
        data=(
            go.Scatter3d(
                x=[px],
                y=[py],
                z=[pz],
                mode="markers+text",
                marker=dict(color="red", size=8),
                text=["P(3, 4, 5)"],
                textposition="top center",
                name="P(3, 4, 5)",
            ),
            drop_line([px, px], [py, py], [0, pz]),
            drop_line([px, px], [0, py], [0, 0]),
            drop_line([0, px], [py, py], [0, 0]),
            go.Scatter3d(
                x=[px], y=[py], z=[0], mode="markers", marker=dict(color="gray", size=5, symbol="cross"), showlegend=False
            ),
        ),
        layout=dict(
            title="3D Coordinate System<br>d = √(Δx² + Δy² + Δz²)",
            scene=dict(
                xaxis=dict(title="X", range=[0, 5]),
                yaxis=dict(title="Y", range=[0, 5]),
                zaxis=dict(title="Z", range=[0, 6]),
            ),
        ),
    )


def build_helix_tangent() -> ChartDescriptor:
    n = 500
    t = linspace(0, 4 * PI, n)
    t0 = PI / 4
    p0 = (np.cos(t0), np.sin(t0), t0)
    dp = (-np.sin(t0) * 0.7, np.cos(t0) * 0.7, 0.7)  # r'(t0), scaled

    return ChartDescriptor(
        data=(
            go.Scatter3d(
                x=np.cos(t), y=np.sin(t), z=t.copy(), mode="lines", line=dict(color="royalblue", width=3), name="r(t) = ⟨cos t, sin t, t⟩"
            ),
            go.Cone(
                x=[p0[0]],
                y=[p0[1]],
                z=[p0[2]],
                u=[dp[0]],
                v=[dp[1]],
                w=[dp[2]],
                colorscale=_solid("red"),
                showscale=False,
                sizemode="absolute",
                sizeref=0.5,
                anchor="tail",
                name="r'(t) tangent",
            ),
            go.Scatter3d(x=[p0[0]], y=[p0[1]], z=[p0[2]], mode="markers", marker=dict(color="red", size=5), showlegend=False),
            go.Scatter3d(
                x=np.cos(t),
                y=np.sin(t),
                z=np.zeros(n),
                mode="lines",
                line=dict(color="gray", width=1, dash="dash"),
                opacity=0.4,
                name="projection",
            ),
        ),
        layout=dict(
            title="Helix r(t) = ⟨cos t, sin t, t⟩<br>with tangent vector r'(t) = ⟨−sin t, cos t, 1⟩",
            scene=_xyz_scene(),
        ),
    )


def build_multivariable_surface() -> ChartDescriptor:
    n = 80
    x = linspace(-3, 3, n)
    y = linspace(-3, 3, n)
    X, Y = meshgrid(x, y)
    R2 = X * X + Y * Y
    Z = np.sin(np.sqrt(R2)) * np.exp(-0.18 * R2)

    return ChartDescriptor(
        data=(
            go.Surface(
                x=x,
                y=y,
                z=Z,
                colorscale="Viridis",
                opacity=0.92,
                contours=dict(z=dict(show=True, usecolormap=True, highlightcolor="#42f462", project=dict(z=True))),
                name="z = f(x,y)",
            ),
        ),
        layout=dict(
            title="Functions of Several Variables<br>z = sin(√(x²+y²)) · e^(−0.18(x²+y²))",
            scene=_xyz_scene(),
        ),
    )


def build_partial_derivatives() -> ChartDescriptor:
    n = 60
    x = linspace(-2, 2, n)
    y = linspace(-2, 2, n)
    X, Y = meshgrid(x, y)
    Z = X * X + 0.5 * Y * Y

    return ChartDescriptor(
        data=(
            go.Surface(x=x, y=y, z=Z, colorscale="Plasma", opacity=0.50, showscale=False, name="f(x,y) = x² + 0.5y²"),
            go.Scatter3d(
                x=x, y=np.zeros(n), z=x * x, mode="lines", line=dict(color="red", width=4), name="∂f/∂x slice (y=0)"
            ),
            go.Scatter3d(
                x=np.zeros(n), y=y, z=0.5 * y * y, mode="lines", line=dict(color="blue", width=4), name="∂f/∂y slice (x=0)"
            ),
        ),
        layout=dict(
            title="f(x,y) = x² + 0.5y²<br>Partial-Derivative Cross-Sections (red=∂f/∂x, blue=∂f/∂y)",
            scene=_xyz_scene(),
        ),
    )


def build_tangent_plane() -> ChartDescriptor:
    n = 50
    x = linspace(-2, 2, n)
    y = linspace(-2, 2, n)
    X, Y = meshgrid(x, y)
    Z = X * X + Y * Y
    a, b, fab = 1.0, 1.0, 2.0
    # f_x(a,b) = 2a, f_y(a,b) = 2b
    Z_plane = fab + 2 * a * (X - a) + 2 * b * (Y - b)

    return ChartDescriptor(
        data=(
            go.Surface(x=x, y=y, z=Z, colorscale="Blues", opacity=0.55, name="Surface z = x² + y²"),
            go.Surface(
                x=x, y=y, z=Z_plane, colorscale=_solid("orange"), opacity=0.40, showscale=False, name="Tangent Plane at (1,1,2)"
            ),
            go.Scatter3d(
                x=[a],
                y=[b],
                z=[fab],
                mode="markers+text",
                marker=dict(color="red", size=10),
                text=["(a, b, f(a,b))"],
                textposition="top center",
                name="Point of tangency",
            ),
        ),
        layout=dict(
            title="Tangent Plane to z = x² + y² at (1, 1, 2)<br>z − f(a,b) = fₓ(a,b)(x−a) + fᵧ(a,b)(y−b)",
            scene=_xyz_scene(),
        ),
    )


def build_critical_points() -> ChartDescriptor:
    n = 50
    x = linspace(-2, 2, n)
    y = linspace(-2, 2, n)
    X, Y = meshgrid(x, y)
    panels = [
        ("scene", X * X - Y * Y, "RdBu", "Saddle  z = x²−y²"),
        ("scene2", X * X + Y * Y, "Blues", "Min  z = x²+y²"),
        ("scene3", -(X * X + Y * Y), "Reds", "Max  z = −x²−y²"),
    ]

    traces = []
    for scene, Z, colorscale, name in panels:
        traces.append(go.Surface(x=x, y=y, z=Z, colorscale=colorscale, opacity=0.85, showscale=False, scene=scene, name=name))
        traces.append(
            go.Scatter3d(x=[0], y=[0], z=[0], mode="markers", marker=dict(color="red", size=7), scene=scene, showlegend=False)
        )

    blank = dict(xaxis=dict(title=""), yaxis=dict(title=""), zaxis=dict(title=""))
    return ChartDescriptor(
        data=tuple(traces),
        layout=dict(
            title="Critical Points — Second Derivative Test  D = fₓₓ·fᵧᵧ − (fₓᵧ)²",
            scene=dict(
                domain=dict(x=[0.00, 0.30], y=[0, 1]),
                annotations=[dict(x=0, y=0, z=0, text="Saddle (D<0)", showarrow=False)],
                **blank,
            ),
            scene2=dict(domain=dict(x=[0.35, 0.65], y=[0, 1]), **blank),
            scene3=dict(domain=dict(x=[0.70, 1.00], y=[0, 1]), **blank),
            height=500,
            annotations=[
                _panel_title(0.15, 1.05, "Saddle Point (D<0)", 12),
                _panel_title(0.50, 1.05, "Local Minimum (D>0, fₓₓ>0)", 12),
                _panel_title(0.85, 1.05, "Local Maximum (D>0, fₓₓ<0)", 12),
            ],
        ),
    )


def build_double_integral() -> ChartDescriptor:
    n = 50
    x = linspace(0, 2, n)
    y = linspace(0, 2, n)
    X, Y = meshgrid(x, y)
    Z = np.maximum(0.0, 4 - X * X - Y * Y)

    return ChartDescriptor(
        data=(
            go.Surface(
                x=x,
                y=y,
                z=Z,
                colorscale="Viridis",
                opacity=0.82,
                contours=dict(z=dict(show=True, usecolormap=True, project=dict(z=True))),
                name="f(x,y) = 4 − x² − y²",
            ),
            go.Surface(
                x=x,
                y=y,
                z=np.zeros((n, n)),
                colorscale=_solid("lightblue"),
                opacity=0.22,
                showscale=False,
                name="xy-plane base",
            ),
        ),
        layout=dict(
            title="Double Integral ∬_R f(x,y) dA = Volume under surface<br>f(x,y) = 4 − x² − y²",
            scene=_xyz_scene(zaxis="f(x,y)"),
        ),
    )


def build_coordinate_systems() -> ChartDescriptor:
    n_t, n_z = 80, 30
    theta = linspace(0, 2 * PI, n_t)
    z_vals = linspace(0, 3, n_z)
    r_cyl = 1.5

    # Cylinder, grids (n_z, n_t)
    T, Zc = meshgrid(theta, z_vals)
    cyl_x = r_cyl * np.cos(T)
    cyl_y = r_cyl * np.sin(T)

    r0, th0, z0 = 1.5, PI / 3, 2.0
    px1, py1 = r0 * np.cos(th0), r0 * np.sin(th0)

    # Sphere, grids (n_t, n_t) with rows indexed by theta
    phi = linspace(0, PI, n_t)
    rho = 2.0
    P, Th = meshgrid(phi, theta)
    sph_x = rho * np.sin(P) * np.cos(Th)
    sph_y = rho * np.sin(P) * np.sin(Th)
    sph_z = rho * np.cos(P)

    rho0, phi0, the0 = 2.0, PI / 4, PI / 3
    px2 = rho0 * np.sin(phi0) * np.cos(the0)
    py2 = rho0 * np.sin(phi0) * np.sin(the0)
    pz2 = rho0 * np.cos(phi0)

    return ChartDescriptor(
        data=(
            go.Surface(
                x=cyl_x, y=cyl_y, z=Zc, colorscale=_solid("cyan"), opacity=0.18, showscale=False, scene="scene", name="Cylinder"
            ),
            go.Scatter3d(
                x=[px1], y=[py1], z=[z0], mode="markers", marker=dict(color="red", size=8), scene="scene", name="P(r=1.5, θ=π/3, z=2)"
            ),
            go.Scatter3d(
                x=[0, px1],
                y=[0, py1],
                z=[z0, z0],
                mode="lines",
                line=dict(color="red", width=2, dash="dash"),
                scene="scene",
                name="r",
                showlegend=False,
            ),
            go.Scatter3d(
                x=[px1, px1],
                y=[py1, py1],
                z=[0, z0],
                mode="lines",
                line=dict(color="green", width=2, dash="dash"),
                scene="scene",
                name="z",
                showlegend=False,
            ),
            go.Surface(
                x=sph_x,
                y=sph_y,
                z=sph_z,
                colorscale=_solid("lightgreen"),
                opacity=0.18,
                showscale=False,
                scene="scene2",
                name="Sphere ρ=2",
            ),
            go.Scatter3d(
                x=[px2],
                y=[py2],
                z=[pz2],
                mode="markers",
                marker=dict(color="red", size=8),
                scene="scene2",
                name="P(ρ=2, φ=π/4, θ=π/3)",
            ),
            go.Scatter3d(
                x=[0, px2],
                y=[0, py2],
                z=[0, pz2],
                mode="lines",
                line=dict(color="red", width=2),
                scene="scene2",
                name="ρ",
                showlegend=False,
            ),
        ),
        layout=dict(
            title="3D Coordinate Systems",
            scene=_xyz_scene(domain=dict(x=[0.00, 0.48], y=[0, 1])),
            scene2=_xyz_scene(domain=dict(x=[0.52, 1.00], y=[0, 1])),
            height=520,
            annotations=[
                _panel_title(0.24, 1.04, "Cylindrical (r, θ, z)  dV = r dz dr dθ", 13),
                _panel_title(0.76, 1.04, "Spherical (ρ, φ, θ)  dV = ρ² sin φ dρ dφ dθ", 13),
            ],
        ),
    )


def build_vector_field_3d() -> ChartDescriptor:
    pts = np.arange(-2, 3, dtype=np.float64)
    # x varies fastest, then y, then z
    Z, Y, X = np.meshgrid(pts, pts, pts, indexing="ij")
    X, Y, Z = X.ravel(), Y.ravel(), Z.ravel()

    return ChartDescriptor(
        data=(
            go.Cone(
                x=X,
                y=Y,
                z=Z,
                u=-Y * 0.35,
                v=X * 0.35,
                w=Z * 0.12,
                colorscale="Blues",
                sizemode="absolute",
                sizeref=0.45,
                showscale=True,
                colorbar=dict(title="|F|"),
                anchor="tail",
                name="F = ⟨−y, x, z/3⟩",
            ),
        ),
        layout=dict(
            title="3D Vector Field  F = ⟨−y, x, z/3⟩<br>curl F ≠ 0 (rotation about z-axis)",
            scene=_xyz_scene(aspectmode="cube"),
        ),
    )
