import os
import logging
from flask import Flask, request, jsonify

# Configure logging
logging.basicConfig(level=os.environ.get('LOG_LEVEL', 'DEBUG'), format='%(asctime)s - %(levelname)s - %(message)s')

from sensor_label.sensor_label_parser import analyze_sensor_label, validate_serial_number, validate_lot_number

app = Flask(__name__)

ALLOWED_EXTENSIONS = {'txt'}
# OCR text from one label is a few kilobytes at most
app.config['MAX_CONTENT_LENGTH'] = int(os.environ.get('MAX_TEXT_BYTES', 64 * 1024))


def allowed_file(filename):
    return '.' in filename and filename.rsplit('.', 1)[1].lower() in ALLOWED_EXTENSIONS


def _request_text():
    """OCR text from a JSON body, a form field, or an uploaded .txt file."""
    payload = request.get_json(silent=True)
    if isinstance(payload, dict) and isinstance(payload.get('text'), str):
        return payload['text']
    if 'text' in request.form:
        return request.form['text']
    file = request.files.get('file')
    if file and file.filename and allowed_file(file.filename):
        return file.read().decode('utf-8', errors='replace')
    return None


@app.route('/')
def home():
    return jsonify({
        'service': 'sensor-label-extractor',
        'endpoints': ['POST /extract', 'POST /validate'],
    })


@app.route('/extract', methods=['POST'])
def extract():
    text = _request_text()
    if text is None:
        return jsonify({'error': 'No OCR text provided (send "text" or a .txt file)'}), 400

    try:
        result, confidence_info = analyze_sensor_label(text)
        app.logger.info(f"Extraction: serial={result.serial_number}, lot={result.lot_number}, confidence={result.confidence}%")

        response = result.to_dict()
        response['confidenceDetails'] = confidence_info['details']
        response['needsReview'] = confidence_info['needs_review']
        return jsonify(response)

    except Exception as e:
        app.logger.error(f"Error extracting sensor data: {str(e)}")
        return jsonify({'error': f'Error extracting sensor data: {str(e)}'}), 500


@app.route('/validate', methods=['POST'])
def validate():
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        return jsonify({'error': 'Expected a JSON object'}), 400

    manufacturer = payload.get('manufacturer')
    serial_valid = validate_serial_number(payload.get('serialNumber'), manufacturer)
    lot_valid = validate_lot_number(payload.get('lotNumber'), manufacturer)
    app.logger.debug(f"Validation for {manufacturer}: serial={serial_valid}, lot={lot_valid}")

    return jsonify({'serialValid': serial_valid, 'lotValid': lot_valid})


@app.errorhandler(413)
def too_large(e):
    return jsonify({'error': 'OCR text too large'}), 413


if __name__ == '__main__':
    app.run(debug=True, port=5001)
