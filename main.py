from rich.pretty import pprint

from pennant import Command

__prog__ = "pennant-demo"

tool = Command("demo", version="0.1.0", shell=True, colorful=True)
count = tool.integer("c", "count", "how many greetings to print", 1, lambda x: x > 0)
loud = tool.boolean("l", "loud", "shout the greeting")
who = tool.wild_text("name", "who to greet", "world")

echo = tool.command("echo", descr="print the remaining words back")
upper = echo.boolean("u", "upper", "print in upper case")


if __name__ == '__main__':
    result = tool.parse()
    if result.command is echo:
        words = " ".join(result.remaining)
        print(words.upper() if upper.value else words)
    else:
        for _ in range(count.value):
            greeting = "hello, %s" % who.value
            print(greeting.upper() + "!" if loud.value else greeting)
    pprint(result.diagnostics)
