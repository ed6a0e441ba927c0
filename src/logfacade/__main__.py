from logfacade.demo import main

main()
