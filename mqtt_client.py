import json

import paho.mqtt.client as mqtt
from color_mapping import to_hex
from game_config import GameConfig
from input_control import SensorSource
from outcome_sink import OutcomeSink

SENSOR_SIZES = {
    "accelerometer": 2,
    "magnetic": 3,
    "light": 3,
}
MAX_PAYLOAD_SIZE = 256


class MQTTClient(SensorSource, OutcomeSink):
    """Receives sensor samples from the broker and publishes the game outcome back.

    Sensor topics carry a JSON array of floats, e.g. ``[0.1, -2.5]`` on
    ``<topic>/sensor/accelerometer``. Messages are handled on paho's network
    thread and only posted to the engine channels from there.
    """

    def __init__(self, config: GameConfig, client: mqtt.Client = None):
        self.config = config
        if client is None:
            client = mqtt.Client(mqtt.CallbackAPIVersion.VERSION2)
            if self.config.USERNAME is not None:
                client.username_pw_set(self.config.USERNAME, self.config.PASSWORD)
        self.client = client
        self.client.on_connect = self._on_connect
        self.client.on_message = self._on_message

        self.connected = False
        self.fell_into_holes = 0
        self.background_color = None
        self._engine = None

    def _on_connect(self, client, userdata, flags, reason_code, properties=None):
        if reason_code == 0:
            print("Connected to MQTT broker")
            client.publish(self.config.TOPIC + "/general", "Connected")
            client.subscribe(self.config.TOPIC + "/general")
            client.subscribe(self.config.TOPIC + "/sensor/#")
            self.connected = True
        else:
            print(f"Failed to connect to MQTT broker, return code: {reason_code}")
            self.connected = False

    def _on_message(self, client, userdata, msg):
        payload = msg.payload.decode(errors="replace")
        if msg.topic == self.config.TOPIC + "/general":
            self._handle_command(client, payload)
        elif msg.topic.startswith(self.config.TOPIC + "/sensor/"):
            self._handle_sample(msg.topic.rsplit("/", 1)[-1], payload)

    def _handle_command(self, client, command: str):
        if self._engine is None:
            return
        if command == "initialize":
            client.publish(self.config.TOPIC + "/general", "initialize_ack")
            self.fell_into_holes = 0
            self._engine.reset()
            self._engine.resume()
        elif command == "reset":
            self._engine.reset()
        elif command == "stop":
            self._engine.stop()
        elif command == "resume":
            self._engine.resume()

    def _handle_sample(self, sensor: str, payload: str) -> bool:
        if self._engine is None or sensor not in SENSOR_SIZES:
            return False
        if len(payload) > MAX_PAYLOAD_SIZE:
            print(f"Invalid {sensor} payload: {len(payload)} bytes is too long")
            return False
        try:
            data = json.loads(payload)
            if not isinstance(data, list):
                raise TypeError(f"expected a JSON array, got {type(data).__name__}")
            values = [float(v) for v in data]
        except (ValueError, TypeError, RecursionError) as e:
            print(f"Invalid {sensor} payload '{payload[:40]}': {e}")
            return False
        if len(values) < SENSOR_SIZES[sensor]:
            print(f"Invalid {sensor} payload '{payload}': expected {SENSOR_SIZES[sensor]} values")
            return False

        if sensor == "accelerometer":
            return self._engine.post_accelerometer(values[0], values[1])
        if sensor == "magnetic":
            return self._engine.post_magnetic(values[0], values[1], values[2])
        return self._engine.post_light(values)

    def start(self, engine):
        self._engine = engine
        self.client.connect(self.config.BROKER, self.config.PORT, 30)
        self.client.loop_start()

    def stop(self):
        self.client.loop_stop()
        self.client.disconnect()
        self.connected = False

    def on_defeat(self):
        self.fell_into_holes += 1
        self.client.publish(self.config.TOPIC + "/general", "defeat")

    def on_victory(self):
        self.client.publish(self.config.TOPIC + "/points", self.fell_into_holes)
        self.client.publish(self.config.TOPIC + "/general", "victory")

    def set_background_color(self, color: tuple[int, int, int]):
        # The light sensor fires at game rate, only publish changes
        if color == self.background_color:
            return
        self.background_color = color
        self.client.publish(self.config.TOPIC + "/background", to_hex(color), retain=True)
