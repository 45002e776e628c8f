"""Configuration for the pinch-attracted 3D flocking simulation."""

WINDOW = {
    "width": 1280,
    "height": 720,
    "title": "Pinch Flock"
}

CAMERA = {
    "fov": 60.0,
    "near_clip": 0.05,
    "far_clip": 100.0,
    "initial_radius": 12.0,
    "initial_theta": 45.0,
    "initial_phi": 20.0,
    "min_radius": 2.0,
    "max_radius": 40.0,
    "min_phi": -89.0,
    "max_phi": 89.0,
    "target": (0.0, 2.5, 0.0),   # Flock spawns above the floor
    "keyboard_rotate_speed": 60.0,
    "keyboard_zoom_speed": 6.0,
    "mouse_sensitivity": 0.3
}

GRID = {
    "size": 6.0,
    "divisions": 12,
    "color": (0.2, 0.2, 0.25)
}

# Flock-level steering parameters (partial-merge via Swarm.set_parameters)
FLOCK = {
    "separation_distance": 0.8,   # Neighbor radius for separation
    "alignment_distance": 1.5,    # Neighbor radius for alignment
    "cohesion_distance": 1.8,     # Neighbor radius for cohesion
    "separation_force": 1.0,
    "alignment_force": 0.6,
    "cohesion_force": 0.5,
    "boundary_radius": 5.0,       # Soft containment sphere around the origin
    "boundary_force": 0.2,
    "attraction_distance": 3.0,   # How far agents can sense attraction points
    "attraction_force": 1.5,
}

# Per-agent kinematics (Swarm.set_agent_parameters)
AGENT = {
    "max_speed": 0.04,
    "max_force": 0.005,
    "smoothing_factor": 0.8,      # Higher = more damping
    "rotation_smoothing": 0.85,   # Higher = slower turning of the facing
    "initial_speed": 0.02,
    "count": 200,
}

# Spawn volumes: (min, max) per axis
SPAWN = {
    "flock": ((-3.0, 3.0), (1.0, 4.0), (-3.0, 3.0)),
    "agent": ((-5.0, 5.0), (1.0, 6.0), (-5.0, 5.0)),
    "saturation": 0.8,
    "lightness": 0.5,
}

ATTRACTION = {
    "highlight_color": (1.0, 1.0, 128 / 255),   # 0xffff80
    "emissive_color": (0.2, 0.2, 0.0),          # 0x333300
    "tint_scale": 0.7,
    "min_strength": 0.1,
    "max_strength": 1.0,
    "nearest_cutoff": 1.0,
    "nearest_flash_color": (1.0, 1.0, 0.0),
}

# Mouse buttons standing in for pinching hands (pygame button -> hand)
PINCH = {
    "buttons": {3: "right", 2: "left"},
}

# Tuning ranges (min, max, step)
PARAM_RANGES = {
    "separation_distance": (0.1, 3.0, 0.1),
    "alignment_distance": (0.1, 5.0, 0.1),
    "cohesion_distance": (0.1, 5.0, 0.1),
    "separation_force": (0.1, 3.0, 0.1),
    "alignment_force": (0.1, 2.0, 0.1),
    "cohesion_force": (0.1, 2.0, 0.1),
    "boundary_radius": (1.0, 10.0, 0.5),
    "boundary_force": (0.05, 1.0, 0.05),
    "attraction_distance": (0.5, 5.0, 0.1),
    "attraction_force": (0.1, 3.0, 0.1),
    "max_speed": (0.01, 0.1, 0.01),
    "max_force": (0.001, 0.02, 0.001),
    "smoothing_factor": (0.1, 0.95, 0.05),
    "agent_count": (10, 200, 10),
}

RENDER = {
    "cone_length": 0.2,
    "cone_radius": 0.05,
    "cone_segments": 8,
    "boundary_color": (0.25, 0.35, 0.5),
    "boundary_segments": 32,
    "marker_radius": 0.08,
    "marker_color": (1.0, 0.85, 0.2),
}

RECORDING = {
    "directory": "recordings",
    "frames": 600,
    "compression_level": 10,
    "orbit_radius": 2.5,
    "orbit_height": 2.5,
    "orbit_period": 240,          # Frames per revolution
}

COLORS = {
    "background": (0.02, 0.02, 0.04, 1.0),
    "text": (0.9, 0.9, 0.9)
}
