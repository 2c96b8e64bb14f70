import unittest
from unittest.mock import MagicMock, patch
from agents.analyst import DataAnalystAgent
from data_ingestion.table import Table

def make_table(row_count=3):
    headers = ["Product", "Sales"]
    rows = [{"Product": f"item{i}", "Sales": str(i * 10)} for i in range(1, row_count + 1)]
    return Table(headers=headers, rows=rows, source_name="sales.csv")

class TestDataAnalystAgent(unittest.TestCase):
    def _agent_with_reply(self, mock_openai, content, **kwargs):
        mock_client = MagicMock()
        mock_openai.return_value = mock_client

        mock_response = MagicMock()
        mock_response.choices[0].message.content = content
        mock_client.chat.completions.create.return_value = mock_response

        return DataAnalystAgent(api_key="test-key", **kwargs), mock_client

    @patch('agents.analyst.OpenAI')
    def test_analyze_table_answer(self, mock_openai):
        agent, _ = self._agent_with_reply(mock_openai, '''
        {
            "message": "Top products by sales",
            "headers": ["Product", "Sales"],
            "data": [{"Product": "item3", "Sales": "30"}, "not a row"]
        }
        ''')

        result = agent.analyze(make_table(), "Show the top products")

        self.assertEqual(result['message'], "Top products by sales")
        self.assertEqual(result['headers'], ["Product", "Sales"])
        self.assertEqual(result['data'], [{"Product": "item3", "Sales": "30"}])

    @patch('agents.analyst.OpenAI')
    def test_analyze_table_answer_default_message(self, mock_openai):
        agent, _ = self._agent_with_reply(mock_openai, '{"headers": ["A"], "data": []}')

        result = agent.analyze(make_table(), "table please")

        self.assertEqual(result['message'], "Here's the analysis of your data:")
        self.assertEqual(result['data'], [])

    @patch('agents.analyst.OpenAI')
    def test_analyze_text_answer(self, mock_openai):
        agent, _ = self._agent_with_reply(mock_openai, '{"message": "Sales are rising."}')

        result = agent.analyze(make_table(), "Summarize")

        self.assertEqual(result, {"message": "Sales are rising."})

    @patch('agents.analyst.OpenAI')
    def test_non_json_answer_is_returned_as_text(self, mock_openai):
        agent, _ = self._agent_with_reply(mock_openai, "Plain prose answer")

        result = agent.analyze(make_table(), "Summarize")

        self.assertEqual(result, {"message": "Plain prose answer"})

    @patch('agents.analyst.OpenAI')
    def test_empty_answer(self, mock_openai):
        agent, _ = self._agent_with_reply(mock_openai, "")

        result = agent.analyze(make_table(), "Summarize")

        self.assertIn("couldn't generate insights", result['message'])

    @patch('agents.analyst.OpenAI')
    def test_analyze_error(self, mock_openai):
        mock_client = MagicMock()
        mock_openai.return_value = mock_client
        mock_client.chat.completions.create.side_effect = Exception("API Error")

        agent = DataAnalystAgent(api_key="test-key")
        result = agent.analyze(make_table(), "Summarize")

        self.assertTrue(result['message'].startswith("I encountered an error analyzing your data."))
        self.assertIn("API Error", result['message'])
        self.assertNotIn('headers', result)

    @patch('agents.analyst.OpenAI')
    def test_prompt_contains_limited_sample(self, mock_openai):
        agent, mock_client = self._agent_with_reply(
            mock_openai, '{"message": "ok"}', max_rows_to_send=2
        )

        agent.analyze(make_table(row_count=5), "How many items?")

        kwargs = mock_client.chat.completions.create.call_args.kwargs
        system_prompt = kwargs['messages'][0]['content']
        user_prompt = kwargs['messages'][1]['content']

        self.assertEqual(kwargs['response_format'], {"type": "json_object"})
        self.assertIn("Product, Sales", system_prompt)
        self.assertIn("5", system_prompt)
        self.assertIn("item2,20", user_prompt)
        self.assertNotIn("item3", user_prompt)
        self.assertIn("How many items?", user_prompt)

    @patch('agents.analyst.OpenAI')
    def test_mock_mode_without_key(self, mock_openai):
        agent = DataAnalystAgent(api_key=None)

        result = agent.analyze(make_table(), "compare the top products")

        self.assertTrue(agent.mock_mode)
        mock_openai.assert_not_called()
        self.assertEqual(result['headers'], ["Product", "Sales", "Growth", "Status"])

if __name__ == '__main__':
    unittest.main()
