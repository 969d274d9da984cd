import numpy as np
from online_stree import OnlineSuffixTree
from online_stree.python_backend.naive_search import naive_find_all
import time
from typing import List, Tuple
import pandas as pd
import matplotlib.pyplot as plt

def generate_random_strings(n: int, length: int, alphabet: List[str]) -> List[str]:
    """Generate n random strings of given length over an alphabet"""
    return [''.join(np.random.choice(alphabet, length)) for _ in range(n)]

def run_benchmark(text_length: int, n_patterns: int, pattern_length: int, alphabet: List[str]) -> Tuple[float, float, float]:
    """Run benchmark and return build time, tree search time and naive search time"""
    text = generate_random_strings(1, text_length, alphabet)[0]
    # Half the patterns are cut from the text, half are random.
    starts = np.random.randint(0, text_length - pattern_length + 1, n_patterns // 2)
    patterns = [text[s:s + pattern_length] for s in starts]
    patterns += generate_random_strings(n_patterns - len(patterns), pattern_length, alphabet)

    start_time = time.time()
    tree = OnlineSuffixTree(text)
    build_time = time.time() - start_time

    start_time = time.time()
    for p in patterns:
        tree.find_all_occurrences(p)
    search_time = time.time() - start_time

    start_time = time.time()
    for p in patterns:
        naive_find_all(text, p)
    naive_time = time.time() - start_time

    return build_time, search_time, naive_time

def main():
    # Test parameters
    text_lengths = [1_000, 10_000, 100_000]
    alphabets = {'binary': ['0', '1'], 'dna': ['a', 'c', 'g', 't']}
    n_patterns = 1_000
    pattern_length = 8

    results = []

    try:
        for alphabet_name, alphabet in alphabets.items():
            for text_length in text_lengths:
                print(f"Testing: text of length {text_length} over {alphabet_name} alphabet, {n_patterns} patterns")
                build_time, search_time, naive_time = run_benchmark(text_length, n_patterns, pattern_length, alphabet)
                results.append({
                    'alphabet': alphabet_name,
                    'text_length': text_length,
                    'build_time': build_time,
                    'chars_per_second': text_length / build_time,
                    'search_time': search_time,
                    'naive_search_time': naive_time,
                    'search_speedup': naive_time / search_time if search_time > 0 else float('nan')
                })

        df = pd.DataFrame(results)
        df.to_csv('benchmark_results.csv', index=False)

        print("\nBenchmark Summary:")
        print("=================")
        print(df.to_string(index=False))

        plt.figure(figsize=(12, 6))

        plt.subplot(1, 2, 1)
        for alphabet_name in alphabets:
            data = df[df['alphabet'] == alphabet_name]
            plt.plot(data['text_length'], data['chars_per_second'], marker='o', label=alphabet_name)
        plt.xscale('log')
        plt.xlabel('Text Length')
        plt.ylabel('Characters per Second')
        plt.title('Construction Throughput')
        plt.grid(True, alpha=0.3)
        plt.legend()

        plt.subplot(1, 2, 2)
        for alphabet_name in alphabets:
            data = df[df['alphabet'] == alphabet_name]
            plt.plot(data['text_length'], data['search_speedup'], marker='o', label=alphabet_name)
        plt.xscale('log')
        plt.xlabel('Text Length')
        plt.ylabel('Speedup over Naive Scan')
        plt.title('find_all_occurrences vs Naive Scan')
        plt.grid(True, alpha=0.3)
        plt.legend()

        plt.tight_layout()
        plt.savefig('benchmark_results.png', dpi=300, bbox_inches='tight')
        plt.close()

    except KeyboardInterrupt:
        print("\nBenchmark interrupted by user.")

if __name__ == '__main__':
    main()
