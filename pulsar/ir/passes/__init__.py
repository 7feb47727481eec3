"""Reserved for transformation passes; it holds no modules yet."""