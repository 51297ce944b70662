import sys
import json
import logging
import argparse

from wikibot import Wiki, WikiError, make_list

def read_config():
    try:
        with open("config.json", encoding="utf-8") as file:
            return json.load(file)
    except FileNotFoundError:
        logging.critical("Cannot read config.")
        sys.exit(1)

def connect(config):
    wiki = Wiki(
        config["wiki"],
        api_endpoint=config.get("api_endpoint"),
        summary=config.get("summary"),
    )
    if config.get("username"):
        wiki.login(config["username"], config["password"])
    return wiki

def get(wiki, args):
    print(wiki.page(args.title).text)

def put(wiki, args):
    page = wiki.page(args.title)
    with open(args.file, encoding="utf-8") as file:
        page.text = file.read()
    result = page.save(summary=args.summary)
    if result is None:
        print(f"{page.title}: no changes.")
    else:
        print(json.dumps(result, ensure_ascii=False))

def list_titles(wiki, args):
    for title in make_list(wiki, args.kind, *args.params):
        print(title)

def namespace(wiki, args):
    print(json.dumps({
        "local": wiki.ns_local_for(args.name),
        "canonical": wiki.ns_canon_for(args.name),
    }, ensure_ascii=False))

def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("-v", "--verbose", action="count", default=0)
    subparsers = parser.add_subparsers(dest="command", required=True)

    get_parser = subparsers.add_parser("get", help="Print the text of a page")
    get_parser.add_argument("title")
    get_parser.set_defaults(handler=get)

    put_parser = subparsers.add_parser("put", help="Replace the text of a page with a file")
    put_parser.add_argument("title")
    put_parser.add_argument("file")
    put_parser.add_argument("-s", "--summary")
    put_parser.set_defaults(handler=put)

    list_parser = subparsers.add_parser("list", help="Print a list of titles")
    list_parser.add_argument("kind")
    list_parser.add_argument("params", nargs="*")
    list_parser.set_defaults(handler=list_titles)

    ns_parser = subparsers.add_parser("ns", help="Show the names of a namespace")
    ns_parser.add_argument("name")
    ns_parser.set_defaults(handler=namespace)

    args = parser.parse_args()

    level = logging.NOTSET if args.verbose >= 1 else logging.WARNING
    logging.basicConfig(format="[%(levelname)s] %(name)s: %(message)s", level=level)
    if args.verbose < 2:
        for handler in logging.root.handlers:
            handler.addFilter(logging.Filter("wikibot"))

    config = read_config()
    try:
        wiki = connect(config)
        args.handler(wiki, args)
    except WikiError as e:
        logging.critical(str(e))
        sys.exit(1)

if __name__ == "__main__":
    main()
