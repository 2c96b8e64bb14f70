"""
Canned answers used for demos, keyword debug modes and mock mode.

Each function returns the same shape as DataAnalystAgent.analyze:
{"message": str} for text, plus "headers" and "data" for tables.
"""

SCREENS = [
    ("S1", "WHICH IGNITE PLAYER ARE YOU?", "1096", "100.0"),
    ("S2", "WHICH MATCHES YOUR STYLE", "974", "88.9"),
    ("S3", "WHAT ARE YOUR GO-TO KICKS", "962", "98.8"),
    ("S4", "WHAT IS YOUR PLAYING STYLE", "949", "98.6"),
    ("S5", "WOULD YOU RATHER", "939", "98.9"),
    ("S6", "WE HAVE YOUR RESULTS", "742", "79.0"),
]

def _contains_any(query, *words):
    return any(word in query for word in words)

def nba_sample_response(query):
    query = query.lower()

    if _contains_any(query, "anything else", "should know", "more info"):
        return {
            "message": "# NBA G League Survey Insights 🏀\n\n## Key Patterns\n\n"
                       "• There's a **significant drop-off** between screen S5 and S6 (21% of users don't complete the final screen)\n\n"
                       "• 'Laid back & low key' style preference correlates strongly with choosing Kobes as favorite kicks\n\n"
                       "• Users who selected 'High-scoring guard' were more likely to complete the entire survey"
        }

    if _contains_any(query, "total responses", "count"):
        headers = ["Screen Number", "Screen Name", "Total Responses"]
        return {
            "message": "Here's the total number of responses for each screen in the NBA G League survey 🏀. Screen S1 had the most responses with 1,096!",
            "headers": headers,
            "data": [dict(zip(headers, (num, name, total))) for num, name, total, _ in SCREENS]
        }

    if _contains_any(query, "response rate", "percentage"):
        headers = ["Screen Number", "Screen Name", "Response Rate (%)"]
        return {
            "message": "The response rates for each screen 📈 start at 100% and drop to 79% by the final screen.",
            "headers": headers,
            "data": [dict(zip(headers, (num, name, rate))) for num, name, _, rate in SCREENS]
        }

    if _contains_any(query, "style", "preference"):
        headers = ["Style Option", "Count", "Percentage (%)"]
        styles = [
            ("Laid back & low key", "340", "34.9"),
            ("Streetwear", "307", "31.5"),
            ("Luxury designer", "95", "9.8"),
            ("Cozy tech suit", "232", "23.8"),
        ]
        return {
            "message": "Here's the breakdown of style preferences 👕. 'Laid back & low key' was the most popular choice at nearly 35%!",
            "headers": headers,
            "data": [dict(zip(headers, style)) for style in styles]
        }

    if _contains_any(query, "sum", "add"):
        return {
            "message": "# Survey Completion Summary 🧮\n\n## Key Numbers\n\n"
                       "• **Initial participants**: 1,096\n• **Final screen completions**: 742\n"
                       "• **Overall completion rate**: 68%"
        }

    return {
        "message": "# NBA G League Survey Overview 🏀\n\n## Participation\n\n"
                   "• **Total participants**: 1,096 across 6 screens\n"
                   "• **Completion rate**: 68% (drops to 742 by final screen)\n\n"
                   "## Style Preferences\n\n• **Most popular**: 'Laid back & low key' (34.9%)"
    }

def generic_sample_response(query):
    query = query.lower()

    if _contains_any(query, "top", "compare"):
        headers = ["Product", "Sales", "Growth", "Status"]
        products = [
            ("Widget A", "$45,200", "+12.5%", "Active"),
            ("Widget B", "$32,100", "+8.3%", "Active"),
            ("Widget C", "$15,800", "-2.1%", "Inactive"),
            ("Widget D", "$12,400", "+5.7%", "Active"),
        ]
        return {
            "message": "Here's a comparison of the top products by sales 📊. Widget A is leading with $45,200.",
            "headers": headers,
            "data": [dict(zip(headers, p)) for p in products]
        }

    if _contains_any(query, "total", "sum"):
        headers = ["Category", "Total Sales", "Products", "Avg Growth"]
        categories = [
            ("Electronics", "$78,500", "5", "+7.2%"),
            ("Furniture", "$45,200", "8", "+3.1%"),
            ("Clothing", "$36,700", "12", "+1.5%"),
        ]
        return {
            "message": "I've calculated the total sales by category 🔢. Electronics is your top performer.",
            "headers": headers,
            "data": [dict(zip(headers, c)) for c in categories]
        }

    return {
        "message": "# Data Analysis Summary 📈\n\n## Top Performers\n\n"
                   "• **Leading product**: Widget A with $45,200 in sales and +12.5% growth\n"
                   "• **Top category**: Electronics with $78,500 in total sales"
    }
