"""Run the Lokasi API locally: `python -m lokasi` (listens on HOST:PORT)."""

from lokasi.main import run

if __name__ == "__main__":
    run()
