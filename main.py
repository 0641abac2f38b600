from rich.pretty import pprint

from switchboard import *

deploy = Command(name="deploy", descr="Deploy the current build to an environment")
deploy.add_option(short="e", long="environment", value=True, required=True, help="Set the environment")
deploy.add_option(short="t", long="telephone", value=True, validate=r"\(\d{3}\) \d{4}-\d{4}",
                  help='telephone number in the format "(XXX) XXXX-XXXX"')
deploy.add_option(short="n", long="number-of-entries", value=True, type="integer", help="Number of entries")
deploy.add_option(short="v", long="verbose", help="Verbose output")


if __name__ == '__main__':
    deploy.run()
    pprint(deploy.get_options())
