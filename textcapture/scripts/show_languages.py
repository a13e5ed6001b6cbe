import argparse

from textcapture.services import RecognitionError, source_languages, target_languages


def main():
    parser = argparse.ArgumentParser(description="Print the source and target language catalogs")
    parser.add_argument("--source", default="en")
    args = parser.parse_args()
    try:
        print("source:", source_languages())
    except RecognitionError as e:
        print("source: unavailable", e)
    print(f"target ({args.source}):", target_languages(args.source))


if __name__ == "__main__":
    main()
