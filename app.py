from flask import Flask, request, jsonify, Response
from dotenv import load_dotenv
from werkzeug.utils import secure_filename
from datetime import datetime, timezone
import logging

load_dotenv()
from config import Config
from database import init_db, StoredTable
from data_ingestion import (
    DataSourceRegistry,
    DataSourceType,
    FileAnalyzer,
    FileParser,
    IngestionError,
    Table,
)
from agents.analyst import DataAnalystAgent
from agents.insights import InsightsAgent
from agents.feedback import FeedbackRecorder
from sql_builder import SqlBuilder
from utils import table_to_csv

logger = logging.getLogger(__name__)

ERROR_REPLY = "Sorry, I encountered an error processing your request. Please try again."

def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)

    logging.basicConfig(
        level=app.config.get('LOG_LEVEL', 'INFO'),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    init_db(app)

    # Initialize Agents
    file_parser = FileParser(max_lines=app.config['MAX_INGEST_LINES'])
    file_analyzer = FileAnalyzer()
    data_sources = DataSourceRegistry()
    analyst_agent = DataAnalystAgent(
        api_key=app.config.get('OPENAI_API_KEY'),
        model=app.config['OPENAI_MODEL'],
        max_rows_to_send=app.config['MAX_ROWS_TO_SEND']
    )
    insights_agent = InsightsAgent(analyst_agent)
    feedback_recorder = FeedbackRecorder()

    @app.route('/health', methods=['GET'])
    def health_check():
        return jsonify({"status": "healthy"}), 200

    # ============= Data Endpoints =============

    @app.route('/upload-data', methods=['POST'])
    def upload_data():
        """
        Upload a delimited text file and store it as the user's table.
        Accepts: multipart/form-data with 'file' and optional 'user_id'
        Returns: Table preview
        """
        file = request.files.get('file')
        if file is None or not file.filename:
            return jsonify({"error": "No file provided"}), 400

        user_id = request.form.get('user_id') or 'anonymous'
        filename = secure_filename(file.filename) or 'upload.csv'

        try:
            table = file_parser.parse_bytes(file.read(), filename, file.mimetype)
        except IngestionError as e:
            logger.info("Upload %s rejected: %s", filename, e)
            return jsonify({"error": e.user_message, "kind": e.kind.value}), 400
        except ValueError as e:
            return jsonify({"error": str(e)}), 400

        StoredTable.save_for_user(user_id, table)

        return jsonify({
            "success": True,
            "message": f"Loaded {table.row_count} rows with {table.column_count} columns",
            "preview": file_analyzer.preview(table)
        }), 200

    @app.route('/data/<user_id>', methods=['GET'])
    def get_data(user_id):
        table = StoredTable.load_for_user(user_id)
        if table is None:
            return jsonify({"error": "No data uploaded"}), 404
        return jsonify({"table": table.to_dict(), "preview": file_analyzer.preview(table)}), 200

    @app.route('/data/<user_id>', methods=['DELETE'])
    def clear_data(user_id):
        cleared = StoredTable.clear_for_user(user_id)
        return jsonify({"success": True, "cleared": cleared}), 200

    @app.route('/data-sources', methods=['GET'])
    def list_data_sources():
        return jsonify({
            "source_types": [s.value for s in DataSourceType],
            "brands": data_sources.available_brands()
        }), 200

    # ============= Chat Endpoints =============

    @app.route('/analyze', methods=['POST'])
    def analyze():
        data = request.get_json(silent=True) or {}
        message = data.get('message')
        if not message:
            return jsonify({"error": "Missing 'message' field"}), 400

        try:
            table = _resolve_table(data)
            reply = insights_agent.respond(message, table)
        except ValueError as e:
            return jsonify({"error": str(e)}), 400
        except Exception:
            logger.exception("Error processing request")
            return jsonify({"message": {
                "role": "assistant",
                "content": ERROR_REPLY,
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "type": "text"
            }}), 500

        return jsonify({"message": reply}), 200

    def _resolve_table(data):
        source = data.get('source') or DataSourceType.CSV.value
        uploaded = None
        if source == DataSourceType.CSV.value:
            if data.get('csvData'):
                try:
                    uploaded = Table.from_dict(data['csvData'])
                except ValueError as e:
                    # Covers IngestionError as well as a payload of the wrong shape
                    logger.info("Client table unusable: %s", e)
                    uploaded = None
            else:
                uploaded = StoredTable.load_for_user(data.get('user_id') or 'anonymous')
        return data_sources.resolve(source, brand=data.get('brand'), uploaded=uploaded)

    @app.route('/feedback', methods=['POST'])
    def feedback():
        data = request.get_json(silent=True) or {}
        try:
            record = feedback_recorder.record(
                data.get('feedback'),
                data.get('messageContent'),
                user_id=data.get('userId', 'anonymous'),
                detailed_feedback=data.get('detailedFeedback', '')
            )
        except ValueError as e:
            return jsonify({"success": False, "error": str(e)}), 400
        return jsonify({"success": True, "id": record["id"]}), 200

    @app.route('/feedback', methods=['GET'])
    def list_feedback():
        limit = request.args.get('limit', 50, type=int)
        return jsonify({"feedback": feedback_recorder.list_feedback(limit)}), 200

    # ============= Export Endpoints =============

    @app.route('/export/<fmt>', methods=['POST'])
    def export_table(fmt):
        data = request.get_json(silent=True) or {}
        headers = data.get('headers')
        rows = data.get('data')
        if not isinstance(headers, list) or not isinstance(rows, list):
            return jsonify({"error": "Missing 'headers' or 'data' field"}), 400

        headers = [str(h) for h in headers]
        rows = [r for r in rows if isinstance(r, dict)]

        if fmt == 'csv':
            stamp = datetime.now(timezone.utc).strftime('%Y-%m-%dT%H-%M-%S')
            return Response(
                table_to_csv(headers, rows),
                mimetype='text/csv',
                headers={"Content-Disposition": f"attachment; filename=table-data-{stamp}.csv"}
            )
        if fmt == 'sql':
            return Response(SqlBuilder().build(headers, rows), mimetype='text/plain')
        return jsonify({"error": f"Unsupported export format: {fmt}"}), 400

    return app

if __name__ == '__main__':
    create_app().run(debug=True, port=5001)
