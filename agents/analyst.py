import json
import logging
import os
from openai import OpenAI
from agents.prompts import ANALYST_SYSTEM_PROMPT, ANALYST_USER_TEMPLATE
from agents.sample_responses import generic_sample_response
from utils import build_csv_sample

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4-turbo-preview"

class DataAnalystAgent:
    def __init__(self, api_key=None, model=DEFAULT_MODEL, max_rows_to_send=50):
        if api_key:
            self.client = OpenAI(api_key=api_key, organization=os.environ.get("OPENAI_ORG_ID"))
            self.mock_mode = False
        else:
            self.client = None
            self.mock_mode = True
            logger.warning("OPENAI_API_KEY not found. Running in MOCK mode.")

        self.model = model
        self.max_rows_to_send = max_rows_to_send

    def analyze(self, table, query):
        """
        Answers a question about a table with either text or a table.
        """
        if self.mock_mode:
            return generic_sample_response(query)

        system_prompt = ANALYST_SYSTEM_PROMPT.format(
            headers=", ".join(table.headers),
            row_count=table.row_count
        )
        csv_sample = build_csv_sample(table, self.max_rows_to_send)

        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": ANALYST_USER_TEMPLATE.format(csv_sample=csv_sample, query=query)}
        ]

        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=0.2,
                response_format={"type": "json_object"}
            )
            content = response.choices[0].message.content
        except Exception as e:
            logger.exception("OpenAI call failed")
            return {
                "message": "I encountered an error analyzing your data. Please try again with a different query. "
                           f"Error: {e}"
            }

        return self._parse_answer(content)

    def _parse_answer(self, content):
        if not content:
            return {"message": "I couldn't generate insights from your data. Please try a different query."}

        try:
            answer = json.loads(content)
        except json.JSONDecodeError:
            logger.warning("Model answer was not JSON, returning it as text")
            return {"message": content}

        if not isinstance(answer, dict):
            return {"message": content}

        headers = answer.get("headers")
        data = answer.get("data")
        if isinstance(headers, list) and isinstance(data, list):
            return {
                "message": answer.get("message") or "Here's the analysis of your data:",
                "headers": [str(h) for h in headers],
                "data": [row for row in data if isinstance(row, dict)]
            }

        return {"message": answer.get("message") or content}
