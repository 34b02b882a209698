from dotenv import load_dotenv, find_dotenv
import os

class ConstantsManager:
    _dotenv_loaded = False

    def __init__(self):
        if not ConstantsManager._dotenv_loaded:
            load_dotenv(dotenv_path=find_dotenv(usecwd=True), override=False)
            ConstantsManager._dotenv_loaded = True

    def get_variable(self, variableName, default):
        variable = os.environ.get(variableName, "")
        return variable if variable != "" else default

    def get_output_dir(self):
        return self.get_variable('STEGO_OUTPUT_DIR', 'stego')

    def get_bit_planes_dir(self):
        return self.get_variable('STEGO_BIT_PLANES_DIR', 'bit_planes')

    def get_output_format(self):
        return self.get_variable('STEGO_OUTPUT_FORMAT', 'bmp')

    def get_log_level(self):
        return self.get_variable('LOG_LEVEL', 'INFO').upper()
