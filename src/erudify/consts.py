VERSION = "0.3.0"

STATE_FILE_NAME = "learner_state.yaml"
