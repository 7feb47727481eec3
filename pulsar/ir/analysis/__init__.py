"""Reserved for analyses over control; it holds no modules yet."""