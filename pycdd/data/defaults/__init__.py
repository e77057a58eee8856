# Parameter presets (*.txt) live next to this file
