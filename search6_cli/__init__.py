from dotenv import load_dotenv

load_dotenv(".env")

__version__ = "0.1.0"
