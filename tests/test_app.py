"""
HTTP tests for the Flask app, using an in-memory database and the
analyst in mock mode.
Run with: pytest tests/test_app.py -v
"""

import io
import pytest

from app import create_app
from config import TestConfig

REPORT_CSV = (
    b"Report generated 2024-01-01\n"
    b"Name,Score,Grade\n"
    b"Alice,90,A\n"
    b"Bob,85,B\n"
    b"Carol,77,C\n"
)

@pytest.fixture
def client():
    app = create_app(TestConfig)
    with app.test_client() as client:
        yield client

def upload(client, content, filename='report.csv', user_id='u1'):
    return client.post(
        '/upload-data',
        data={'file': (io.BytesIO(content), filename), 'user_id': user_id},
        content_type='multipart/form-data'
    )

class TestHealth:

    def test_health(self, client):
        res = client.get('/health')
        assert res.status_code == 200
        assert res.get_json() == {"status": "healthy"}

class TestUpload:

    def test_upload_report(self, client):
        res = upload(client, REPORT_CSV)
        body = res.get_json()

        assert res.status_code == 200
        assert body['success'] is True
        assert body['message'] == "Loaded 3 rows with 3 columns"
        assert body['preview']['headers'] == ['Name', 'Score', 'Grade']
        assert body['preview']['file_name'] == 'report.csv'

    def test_upload_empty_file(self, client):
        res = upload(client, b"\n\n")

        assert res.status_code == 400
        assert res.get_json() == {"error": "The CSV file is empty", "kind": "empty_input"}

    def test_upload_header_only(self, client):
        res = upload(client, b"Name,Score\n")

        assert res.status_code == 400
        assert res.get_json()['kind'] == 'no_data_rows'

    def test_upload_unsupported_format(self, client):
        res = upload(client, b"%PDF-1.4", filename='report.pdf')

        assert res.status_code == 400
        assert "Unsupported file format" in res.get_json()['error']

    def test_upload_without_file(self, client):
        res = client.post('/upload-data', data={}, content_type='multipart/form-data')
        assert res.status_code == 400

    def test_stored_table_round_trip(self, client):
        upload(client, REPORT_CSV, user_id='u2')

        res = client.get('/data/u2')
        body = res.get_json()

        assert res.status_code == 200
        assert body['table']['headers'] == ['Name', 'Score', 'Grade']
        assert body['table']['rows'][2] == {'Name': 'Carol', 'Score': '77', 'Grade': 'C'}
        assert body['table']['fileName'] == 'report.csv'

    def test_generated_headers_survive_storage(self, client):
        upload(client, b"Name,Name,Column3\nBob,x,y\n", filename='dupes.csv', user_id='u6')

        body = client.get('/data/u6').get_json()

        assert body['table']['headers'] == ['Name', 'Column2', 'Column3']
        assert body['table']['generatedHeaders'] == ['Column2']
        assert body['preview']['synthetic_headers'] == ['Column2']

    def test_new_upload_replaces_previous(self, client):
        upload(client, REPORT_CSV, user_id='u3')
        upload(client, b"a,b\n1,2\n", filename='small.csv', user_id='u3')

        body = client.get('/data/u3').get_json()

        assert body['table']['headers'] == ['a', 'b']
        assert body['table']['fileName'] == 'small.csv'

    def test_clear_data(self, client):
        upload(client, REPORT_CSV, user_id='u4')

        res = client.delete('/data/u4')
        assert res.get_json() == {"success": True, "cleared": True}
        assert client.get('/data/u4').status_code == 404
        assert client.delete('/data/u4').get_json()['cleared'] is False

class TestAnalyze:

    def test_missing_message(self, client):
        res = client.post('/analyze', json={})
        assert res.status_code == 400

    def test_no_data_uploaded(self, client):
        res = client.post('/analyze', json={"message": "What is the average?", "user_id": "nobody"})
        body = res.get_json()

        assert res.status_code == 200
        assert body['message']['content'].startswith("Please upload a CSV file first")

    def test_analyze_stored_upload(self, client):
        upload(client, REPORT_CSV, user_id='u5')

        res = client.post('/analyze', json={"message": "compare top students", "user_id": "u5"})
        message = res.get_json()['message']

        assert res.status_code == 200
        assert message['role'] == 'assistant'
        assert message['type'] == 'table'
        assert len(message['followUpSuggestions']) == 2

    def test_analyze_client_table(self, client):
        res = client.post('/analyze', json={
            "message": "debug csv",
            "csvData": {"headers": ["x", "x"], "rows": [{"x": "1"}], "fileName": "c.csv"}
        })
        content = res.get_json()['message']['content']

        assert "Headers (2): ['x', 'Column2']" in content

    def test_unusable_client_table_counts_as_no_data(self, client):
        res = client.post('/analyze', json={
            "message": "summarize",
            "csvData": {"headers": ["x"], "rows": []}
        })

        assert res.get_json()['message']['content'].startswith("Please upload a CSV file first")

    def test_malformed_client_table_counts_as_no_data(self, client):
        res = client.post('/analyze', json={"message": "hi", "csvData": ["a", "b"]})
        body = res.get_json()

        assert res.status_code == 200
        assert body['message']['content'].startswith("Please upload a CSV file first")

    def test_client_table_with_bad_headers_counts_as_no_data(self, client):
        res = client.post('/analyze', json={"message": "hi", "csvData": {"headers": "a,b", "rows": []}})

        assert res.status_code == 200
        assert res.get_json()['message']['content'].startswith("Please upload a CSV file first")

    def test_brand_source(self, client):
        res = client.post('/analyze', json={"message": "debug csv", "source": "brand", "brand": "Adidas"})
        content = res.get_json()['message']['content']

        assert "Total Rows: 4" in content
        assert "Ultraboost" in content

    def test_platform_source(self, client):
        res = client.post('/analyze', json={"message": "What stands out?", "source": "platform"})
        message = res.get_json()['message']

        assert message['type'] == 'text'
        assert "Data Analysis Summary" in message['content']

    def test_unknown_source(self, client):
        res = client.post('/analyze', json={"message": "hi", "source": "excel"})
        assert res.status_code == 400

    def test_data_sources_listing(self, client):
        body = client.get('/data-sources').get_json()

        assert body['source_types'] == ['csv', 'platform', 'brand']
        assert body['brands'] == ['Nike', 'Adidas', 'Puma']

class TestFeedback:

    def test_record_and_list(self, client):
        res = client.post('/feedback', json={
            "feedback": "like",
            "messageContent": "Revenue grew 20%.",
            "userId": "u1"
        })
        assert res.status_code == 200
        assert res.get_json()['success'] is True

        client.post('/feedback', json={
            "feedback": "dislike",
            "messageContent": "Wrong total",
            "detailedFeedback": "Off by one"
        })

        entries = client.get('/feedback').get_json()['feedback']
        assert len(entries) == 2
        assert {e['feedback'] for e in entries} == {'like', 'dislike'}
        assert client.get('/feedback?limit=1').get_json()['feedback'][0]['id']

    def test_missing_fields(self, client):
        res = client.post('/feedback', json={"feedback": "like"})

        assert res.status_code == 400
        assert res.get_json() == {"success": False, "error": "Missing required fields"}

class TestExport:

    PAYLOAD = {
        "headers": ["City", "Sales"],
        "data": [{"City": "Boston, MA", "Sales": "10"}]
    }

    def test_export_csv(self, client):
        res = client.post('/export/csv', json=self.PAYLOAD)

        assert res.status_code == 200
        assert res.mimetype == 'text/csv'
        assert res.headers['Content-Disposition'].startswith("attachment; filename=table-data-")
        assert res.get_data(as_text=True) == 'City,Sales\n"Boston, MA",10\n'

    def test_export_sql(self, client):
        res = client.post('/export/sql', json=self.PAYLOAD)
        text = res.get_data(as_text=True)

        assert res.status_code == 200
        assert text.startswith("CREATE TABLE sample_table (\n  City VARCHAR(255),\n  Sales NUMERIC\n);")
        assert "VALUES ('Boston, MA', 10);" in text

    def test_export_unknown_format(self, client):
        res = client.post('/export/xlsx', json=self.PAYLOAD)
        assert res.status_code == 400

    def test_export_missing_fields(self, client):
        res = client.post('/export/csv', json={"headers": ["a"]})
        assert res.status_code == 400

if __name__ == "__main__":
    pytest.main([__file__, "-v"])
