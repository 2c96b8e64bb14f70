import logging
from datetime import datetime, timezone
from agents.sample_responses import nba_sample_response, generic_sample_response

logger = logging.getLogger(__name__)

NO_DATA_MESSAGE = "Please upload a CSV file first to analyze data. I need data to provide insights."
TIME_WORDS = ('date', 'month', 'year', 'period')

def suggest_follow_ups(headers, data):
    """
    Follow-up questions offered under a table answer.
    """
    if not data:
        return ["Can you explain this data?", "What insights can you provide from this data?"]

    suggestions = []
    if any(word in h.lower() for h in headers for word in TIME_WORDS):
        suggestions.extend([
            "How has this data changed over time?",
            "Are there any seasonal patterns in this data?"
        ])
    suggestions.extend([
        "What are the most important insights from this table?",
        "Can you identify any unusual values in this data?"
    ])
    return suggestions

class InsightsAgent:
    def __init__(self, analyst_agent):
        self.analyst = analyst_agent

    def respond(self, query, table=None):
        """
        Routes a chat question and wraps the answer as an assistant message.
        Keywords select the canned NBA answers, a CSV debug dump, or the
        generic sample; anything else goes to the analyst.
        """
        text = query.lower()

        if "debug nba" in text or "use nba" in text or "nba sample" in text:
            logger.info("NBA sample mode requested")
            return self._message(nba_sample_response(query))

        if table is None:
            return self._message({"message": NO_DATA_MESSAGE})

        if "debug csv" in text:
            return self._message({"message": self._debug_info(table)})

        if "use sample" in text:
            return self._message(generic_sample_response(query))

        logger.info("Analyzing %s (%d rows) for query: %s", table.source_name or "table", table.row_count, query)
        return self._message(self.analyst.analyze(table, query))

    def _debug_info(self, table):
        first = table.rows[0]
        lines = [
            "CSV Debug Information:",
            "",
            f"Headers ({len(table.headers)}): {list(table.headers)}",
            "",
            f"First Row Keys: {list(first.keys())}",
            "",
            f"First Row Values: {list(first.values())}",
            "",
            f"Total Rows: {table.row_count}",
            "",
            "Sample Data (first 5 rows):",
        ]
        for i, row in enumerate(table.rows[:5]):
            lines.append(f"Row {i + 1}: {dict(row)}")
        return "\n".join(lines)

    def _message(self, answer):
        message = {
            "role": "assistant",
            "content": answer["message"],
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "type": "text"
        }
        if "headers" in answer and "data" in answer:
            message.update({
                "type": "table",
                "tableHeaders": answer["headers"],
                "tableData": answer["data"],
                "followUpSuggestions": suggest_follow_ups(answer["headers"], answer["data"])
            })
        return message
