import json

CONTROL_MODES = ["mqtt", "mpu6050"]


class GameConfig:
    def __init__(self, config_file_name="config.json"):
        if config_file_name is None:
            config_data = {}
        else:
            with open(config_file_name, "r") as file:
                config_data = json.load(file)

        self.control_mode = config_data.get("control", "mqtt")
        self.debug = config_data.get("debug", False)
        self.time_step_size = config_data.get("time_step_size", 20)
        self.acceleration_factor = config_data.get("acceleration_factor", 100)
        self.max_speed = config_data.get("max_speed", 1000)
        self.damping_factor = config_data.get("damping_factor", 0.8)
        self.ball_radius = config_data.get("ball_radius", 10)
        self.screen_width = config_data.get("screen_width", 800)
        self.screen_height = config_data.get("screen_height", 480)
        self.magnetic_max_range = config_data.get("magnetic_max_range", 50)
        self.clamp_light_color = config_data.get("clamp_light_color", True)
        self.pause_on_outcome = config_data.get("pause_on_outcome", True)
        self.map_file_name = config_data.get("map_file_name", None)

        # MQTT Config
        self.BROKER = config_data.get("broker", "localhost")
        self.PORT = config_data.get("port", 1883)
        self.TOPIC = config_data.get("topic", "sensor_maze")
        self.USERNAME = config_data.get("username", None)
        self.PASSWORD = config_data.get("password", None)

        if self.control_mode not in CONTROL_MODES:
            raise ValueError(f"Invalid control mode: {self.control_mode}. Choose 'mqtt' or 'mpu6050'.")

        if self.time_step_size <= 0:
            raise ValueError(f"time_step_size must be positive, got {self.time_step_size}")

        if self.ball_radius <= 0:
            raise ValueError(f"ball_radius must be positive, got {self.ball_radius}")

        if self.magnetic_max_range <= 0:
            raise ValueError(f"magnetic_max_range must be positive, got {self.magnetic_max_range}")

        if self.screen_width <= 0 or self.screen_height <= 0:
            raise ValueError(f"Invalid screen size: {self.screen_width}x{self.screen_height}")
