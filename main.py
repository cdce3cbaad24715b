import sys

from rich.pretty import pprint

from argspec import *


if __name__ == '__main__':
    spec = (
        ArgSpec.from_argv(sys.argv)
        .require("name")
        .require("file")
        .optional("filter")
        .flag("-d")
        .flag("-v")
        .flag("+b")
    )

    try:
        args = spec.check()
    except ArgsError as error:
        trigger(error, shell=True, fancy=True)
    else:
        pprint(args)
        if filter := args.get_value("filter"):
            print(f"filter name is {filter}")
        else:
            print("no filter")
        pprint({flag: args.has_flag(flag) for flag in spec.possible_flags})
