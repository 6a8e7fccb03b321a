#!/usr/bin/env python3

import argparse
import os
import subprocess

NAME = 'forecast-postgres'
IMAGE = 'postgres:alpine'


def run_cmd(*cmd):
    print(' '.join(cmd))
    subprocess.run(cmd, check=True)


def postgres_cmd(runtime, data_dir, uid, gid):
    return [runtime, 'run', '-d', '--rm', '--name', NAME,
            '-e', 'POSTGRES_USER=forecast',
            '-e', 'POSTGRES_PASSWORD=forecast',
            '--volume', '{}:/var/lib/postgresql/data'.format(data_dir),
            # Lets postgres resolve the host uid it runs as.
            '--volume', '/etc/passwd:/etc/passwd:ro',
            '--user', '{}:{}'.format(uid, gid),
            '--publish', '5432:5432',
            IMAGE]


def main(argv=None):
    parser = argparse.ArgumentParser()
    parser.add_argument('--runtime', choices=('docker', 'podman'),
                        default='docker')
    parser.add_argument('--data-dir', default='postgres-data')
    args = parser.parse_args(argv)

    data_dir = os.path.abspath(args.data_dir)
    os.makedirs(data_dir, exist_ok=True)

    run_cmd(*postgres_cmd(args.runtime, data_dir,
                          os.getuid(), os.getgid()))


if __name__ == '__main__':
    main()
