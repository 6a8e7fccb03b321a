#!/usr/bin/env python3

import argparse
import requests


def main(argv=None):
    weather = 'weather'
    stats = 'stats'

    parser = argparse.ArgumentParser()
    parser.add_argument('--base-url', default='http://127.0.0.1:3000')
    subparsers = parser.add_subparsers(dest='cmd', required=True)
    weather_parser = subparsers.add_parser(weather)
    weather_parser.add_argument('city')
    stats_parser = subparsers.add_parser(stats)
    stats_parser.add_argument('--user', default='forecast')
    stats_parser.add_argument('--password', default='forecast')
    args = parser.parse_args(argv)

    base_url = args.base_url.rstrip('/')

    if args.cmd == weather:
        resp = requests.get(base_url + '/weather',
                            params={'city': args.city})
    elif args.cmd == stats:
        resp = requests.get(base_url + '/stats',
                            auth=(args.user, args.password))

    print(resp.text)
    resp.raise_for_status()


if __name__ == '__main__':
    main()
