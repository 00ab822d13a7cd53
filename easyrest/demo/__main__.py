from easyrest.demo.cli import main

main()
