import json
import requests
import sys

BASE_URL = 'http://127.0.0.1:5001'

def run_eval(base_url=BASE_URL):
    try:
        with open('evaluation/gold_corpus.json', 'r') as f:
            corpus = json.load(f)
    except FileNotFoundError:
        print("Corpus not found.")
        return

    results = []

    print(f"Running evaluation on {len(corpus)} samples...")

    for sample in corpus:
        question = sample['question']
        print(f"Processing: {question}")

        payload = {
            "message": question,
            "source": sample.get('source', 'platform'),
            "brand": sample.get('brand')
        }

        try:
            res = requests.post(f'{base_url}/analyze', json=payload, timeout=120)
            if res.status_code != 200:
                print(f"Error: {res.text}")
                results.append({"id": sample['id'], "status": "error", "error": res.text})
                continue

            message = res.json()['message']

            # Check answer format (text vs table)
            type_match = message.get('type') == sample['expected_type']

            # Check that expected columns appear in a table answer
            headers = set(message.get('tableHeaders') or [])
            expected_headers = set(sample.get('expected_headers', []))
            headers_match = expected_headers.issubset(headers)

            results.append({
                "id": sample['id'],
                "status": "success",
                "type_match": type_match,
                "headers_match": headers_match,
                "answer": message
            })

        except Exception as e:
            print(f"Exception: {e}")
            results.append({"id": sample['id'], "status": "exception", "error": str(e)})

    # Summary
    total = len(results)
    type_correct = sum(1 for r in results if r.get('type_match'))
    headers_correct = sum(1 for r in results if r.get('headers_match'))
    print(f"\nResults: {type_correct}/{total} answer format accuracy, {headers_correct}/{total} header coverage.")

    with open('evaluation/results.json', 'w') as f:
        json.dump(results, f, indent=2)

if __name__ == '__main__':
    run_eval(sys.argv[1] if len(sys.argv) > 1 else BASE_URL)
