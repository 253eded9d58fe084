import os

# Load environment variables from .env file if it exists
env_path = os.path.join(os.path.dirname(__file__), '.env')
if os.path.exists(env_path):
    with open(env_path, 'r') as f:
        for line in f:
            line = line.strip()
            if line and not line.startswith('#') and '=' in line:
                key, value = line.split('=', 1)
                os.environ.setdefault(key.strip(), value.strip())

from sensor_label.app import app

if __name__ == "__main__":
    # Get port from environment variable (for cloud deployment) or use 5001
    port = int(os.getenv('PORT', 5001))
    debug_mode = os.getenv('FLASK_ENV') != 'production'

    print("=" * 70)
    print("Sensor Label Extractor - OCR text to serial/lot/dates")
    print("=" * 70)
    print("  POST /extract   {\"text\": \"<ocr output>\"}")
    print("  POST /validate  {\"serialNumber\": ..., \"manufacturer\": ...}")
    print("=" * 70)

    if debug_mode:
        print(f"\nServer running on http://127.0.0.1:{port}")
        print("\nPress CTRL+C to stop\n")
    else:
        print(f"\nProduction server starting on port {port}")

    app.run(debug=debug_mode, host='0.0.0.0', port=port)
