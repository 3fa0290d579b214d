from game_app import GameApp

# The GameApp class wires the engine to its sensor sources and the MQTT outcome sink
# app.run() starts the dispatch loop, Ctrl+C stops it
# The config.json file contains configuration settings for the game
app = GameApp()
app.run()
