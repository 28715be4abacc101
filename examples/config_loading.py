"""config_loading.py"""

from commandment.config import loader

root = loader("commandment.yaml")

if __name__ == "__main__":
    root.run()
