#!/usr/bin/env python3

import argparse
import subprocess


def run_cmd(*cmd):
    print(' '.join(cmd))
    subprocess.run(cmd, check=True)


def psql_cmd(runtime):
    return [runtime, 'run',
            '--rm',
            '--network', 'host',
            '-it',
            '-e', 'PGPASSWORD=forecast',
            'postgres:alpine',
            'psql',
            '-h', 'localhost',
            '-U', 'forecast']


def main(argv=None):
    parser = argparse.ArgumentParser()
    parser.add_argument('--runtime', choices=('docker', 'podman'),
                        default='docker')
    args = parser.parse_args(argv)

    run_cmd(*psql_cmd(args.runtime))


if __name__ == '__main__':
    main()
