"""
Game, environment and evaluation configuration for Emu War
Presets are plain dicts passed as keyword arguments
"""

# Game parameters (classic arcade values)
GAME_CONFIG = {
    "width": 800,
    "height": 350,
    "crop_count": 20,
    "lives": 3,
    "player_start": (100.0, 150.0),
    "player_speed": 5.0,
    "player_margin": 40.0,     # sprite size; right/bottom movement limit
    "crop_threshold": 30.0,
    "bullet_threshold": 20.0,
    "crop_score": 10,
    "bullet_speed": 3.0,
    "muzzle_offset": 15.0,
    "decoy_move_chance": 0.1,
    "decoy_step": 2.0,
    "decoy_margin": 30.0,
    "tick_ms": 50.0,           # 20 Hz
    "volley_ms": 2000.0,
    "moving_pulse_ms": 200.0,
    "hit_pulse_ms": 500.0,
}

# Environment parameters
ENV_CONFIG = {
    "max_steps": 2400,  # 120 seconds at 20 Hz
    "k_bullets": 6,
    "m_crops": 3,
    **GAME_CONFIG,
}

# ==============================================================================
# REWARD SHAPING CONFIGURATIONS
# ==============================================================================

REWARD_CONFIG_BASELINE = {
    "name": "baseline",
    "description": "Balanced: crops and survival weigh the same",
    "R_CROP": 1.0,       # Reward per crop destroyed
    "R_HIT": 1.0,        # Penalty per bullet taken
    "R_WIN": 5.0,        # All crops cleared
    "R_LOSS": 5.0,       # Out of lives
    "R_TIME": 0.001,     # Small time penalty
}

REWARD_CONFIG_SURVIVAL = {
    "name": "survival",
    "description": "Dodging first - heavy hit/loss penalties",
    "R_CROP": 0.5,
    "R_HIT": 3.0,
    "R_WIN": 5.0,
    "R_LOSS": 10.0,
    "R_TIME": 0.0005,
}

REWARD_CONFIG_RAIDER = {
    "name": "raider",
    "description": "Clear the field fast - crops and the win dominate",
    "R_CROP": 2.0,
    "R_HIT": 0.5,
    "R_WIN": 10.0,
    "R_LOSS": 3.0,
    "R_TIME": 0.002,
}

REWARD_CONFIGS = {
    "baseline": REWARD_CONFIG_BASELINE,
    "survival": REWARD_CONFIG_SURVIVAL,
    "raider": REWARD_CONFIG_RAIDER,
}

# ==============================================================================
# EVALUATION SETTINGS
# ==============================================================================

EVAL_CONFIG = {
    "n_episodes": 20,
    "seed": 42,
    "policies": ["random", "greedy"],
    "log_dir": "./logs",
}
